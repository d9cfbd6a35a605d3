from .booking import BookingViewSet
from .availability import UnitAvailabilityView
from .health import HealthCheckView

__all__ = [
    "BookingViewSet",
    "UnitAvailabilityView",
    "HealthCheckView",
]

from .booking import (
    BookingSerializer,
    BookingCreateSerializer,
    ExtendStaySerializer,
    BookingSnapshotSerializer,
    BookingResultSerializer,
    RejectionSerializer,
)
from .availability import AvailabilityItemSerializer

__all__ = [
    "BookingSerializer",
    "BookingCreateSerializer",
    "ExtendStaySerializer",
    "BookingSnapshotSerializer",
    "BookingResultSerializer",
    "RejectionSerializer",
    "AvailabilityItemSerializer",
]

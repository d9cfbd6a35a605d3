from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views_modules import BookingViewSet, UnitAvailabilityView, HealthCheckView

app_name = "bookings"

router = DefaultRouter()
router.register(r"bookings", BookingViewSet, basename="booking")

urlpatterns = [
    path("", include(router.urls)),
    path("health/", HealthCheckView.as_view(), name="health"),
    path("units/<str:unit_id>/availability/", UnitAvailabilityView.as_view(), name="unit-availability"),
]

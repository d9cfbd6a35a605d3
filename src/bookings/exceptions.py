from rest_framework import status
from rest_framework.exceptions import APIException, NotFound

from .conflicts import RejectReason


class BookingRejected(APIException):
    """A booking rule refused the request; the guest may retry with other dates."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "The booking request was rejected."
    default_code = "booking_rejected"

    def __init__(self, reason: RejectReason):
        self.reason = reason
        super().__init__(detail=reason.label, code=reason.value)


class BookingNotFound(NotFound):
    default_detail = "No booking found for the specified guest and unit"
    default_code = "booking_not_found"

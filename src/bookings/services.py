import logging
from datetime import date

from .conflicts import (
    BookingCandidate, BookingSnapshot, Reject,
    validate_extension, validate_new_booking,
)
from .exceptions import BookingNotFound, BookingRejected
from .store import DjangoReservationStore, ReservationStore

logger = logging.getLogger(__name__)


class BookingService:
    """
    Create and extend bookings against an injected reservation store.

    Each operation runs lookup, validation and write inside the unit's lock,
    so two requests for the same unit cannot both pass validation on the same
    snapshot. New bookings also hold the guest's lock, taken first, so one
    guest cannot slip two bookings in on different units.
    """

    def __init__(self, store: ReservationStore):
        self.store = store

    def create_booking(
        self, guest_name: str, unit_id: str, check_in_date: date, number_of_nights: int
    ) -> BookingSnapshot:
        candidate = BookingCandidate(
            guest_name=guest_name,
            unit_id=unit_id,
            check_in_date=check_in_date,
            number_of_nights=number_of_nights,
        )
        with self.store.lock_guest(guest_name), self.store.lock_unit(unit_id):
            outcome = validate_new_booking(
                candidate,
                self.store.find_by_guest_and_unit(guest_name, unit_id),
                self.store.find_by_guest(guest_name),
                self.store.find_by_unit(unit_id),
            )
            if isinstance(outcome, Reject):
                logger.warning(
                    "booking rejected: guest=%r unit=%r reason=%r",
                    guest_name, unit_id, outcome.reason.value,
                )
                raise BookingRejected(outcome.reason)

            booking = self.store.create(candidate)

        logger.info(
            "booking %s created: guest=%r unit=%r %s..%s",
            booking.id, guest_name, unit_id, booking.check_in_date, booking.check_out_date,
        )
        return booking

    def find_booking(self, guest_name: str, unit_id: str) -> BookingSnapshot:
        """First booking for (guest, unit); there should be at most one."""
        matches = self.store.find_by_guest_and_unit(guest_name, unit_id)
        if not matches:
            raise BookingNotFound()
        return matches[0]

    def extend_stay(self, guest_name: str, unit_id: str, additional_nights: int) -> BookingSnapshot:
        with self.store.lock_unit(unit_id):
            booking = self.find_booking(guest_name, unit_id)
            outcome = validate_extension(
                booking, additional_nights, self.store.find_by_unit(unit_id)
            )
            if isinstance(outcome, Reject):
                logger.warning(
                    "extension rejected: booking=%s nights=+%s reason=%r",
                    booking.id, additional_nights, outcome.reason.value,
                )
                raise BookingRejected(outcome.reason)

            updated = self.store.update(
                booking.id,
                check_out_date=outcome.new_check_out_date,
                number_of_nights=outcome.new_number_of_nights,
            )

        logger.info(
            "booking %s extended by %s night(s): checkout %s -> %s",
            booking.id, additional_nights, booking.check_out_date, updated.check_out_date,
        )
        return updated


def get_booking_service() -> BookingService:
    return BookingService(DjangoReservationStore())

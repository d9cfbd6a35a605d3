"""
Booking conflict rules.

Pure decision functions over snapshots of existing reservations. Nothing in
this module touches the database: callers (see ``services.py``) load the
relevant bookings from a reservation store, ask for a decision, and persist
only on ``Accept``.

All date ranges are half-open ``[start, end)``: a checkout on day D never
conflicts with a check-in on day D.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Union

from django.db import models


class RejectReason(models.TextChoices):
    """Stable reason codes (value) with the message shown to guests (label)."""
    DUPLICATE_GUEST_UNIT = (
        "duplicate guest+unit booking",
        "The given guest name cannot book the same unit multiple times",
    )
    GUEST_ALREADY_BOOKED = (
        "guest already holds a booking",
        "The same guest cannot be in multiple units at the same time",
    )
    UNIT_OCCUPIED = (
        "unit occupied for requested dates",
        "For the given dates, the unit is already occupied",
    )
    EXTENSION_CONFLICT = (
        "extension conflicts with a later booking",
        "The unit is not available for the requested extension period",
    )


@dataclass(frozen=True)
class BookingSnapshot:
    """Read-only view of a stored booking."""
    id: int
    guest_name: str
    unit_id: str
    check_in_date: date
    check_out_date: date
    number_of_nights: int


@dataclass(frozen=True)
class BookingCandidate:
    """A booking that has not been stored yet."""
    guest_name: str
    unit_id: str
    check_in_date: date
    number_of_nights: int

    @property
    def check_out_date(self) -> date:
        return checkout_for(self.check_in_date, self.number_of_nights)


@dataclass(frozen=True)
class Accept:
    # Only populated for extensions.
    new_check_out_date: Optional[date] = None
    new_number_of_nights: Optional[int] = None

    accepted = True


@dataclass(frozen=True)
class Reject:
    reason: RejectReason

    accepted = False

    @property
    def message(self) -> str:
        return self.reason.label


Outcome = Union[Accept, Reject]


# -------------------------
# Preconditions
# -------------------------
def _require_positive_nights(value, field: str) -> int:
    # bool is an int subclass; True nights is a caller bug, not 1 night.
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field} must be an int, got {type(value).__name__}")
    if value < 1:
        raise ValueError(f"{field} must be a positive integer, got {value}")
    return value


def _require_date(value, field: str) -> date:
    if isinstance(value, datetime) or not isinstance(value, date):
        raise TypeError(f"{field} must be a date, got {type(value).__name__}")
    return value


def checkout_for(check_in_date: date, number_of_nights: int) -> date:
    """Checkout day for a stay starting on ``check_in_date``."""
    _require_date(check_in_date, "check_in_date")
    _require_positive_nights(number_of_nights, "number_of_nights")
    return _shift(check_in_date, number_of_nights)


def _shift(day: date, nights: int) -> date:
    try:
        return day + timedelta(days=nights)
    except OverflowError:
        raise ValueError(f"{day} + {nights} night(s) is past {date.max}") from None


# -------------------------
# Overlap checker
# -------------------------
def overlaps(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """True if ``[a_start, a_end)`` and ``[b_start, b_end)`` share a day."""
    return a_start < b_end and a_end > b_start


# -------------------------
# New bookings
# -------------------------
def validate_new_booking(
    candidate: BookingCandidate,
    existing_for_guest_unit: Iterable[BookingSnapshot],
    existing_for_guest: Iterable[BookingSnapshot],
    existing_for_unit: Iterable[BookingSnapshot],
) -> Outcome:
    """
    Decide whether ``candidate`` may be stored.

    Checks run in order and the first failure wins:
      1) the guest already booked this unit (any dates)
      2) the guest holds any booking at all (one booking per guest, globally)
      3) an existing booking on the unit overlaps the requested stay
    """
    _require_date(candidate.check_in_date, "check_in_date")
    _require_positive_nights(candidate.number_of_nights, "number_of_nights")

    if any(existing_for_guest_unit):
        return Reject(RejectReason.DUPLICATE_GUEST_UNIT)

    # Not date-aware on purpose: any booking, past or future, blocks a new one.
    # guest_has_overlapping_booking() below is the date-aware alternative.
    if any(existing_for_guest):
        return Reject(RejectReason.GUEST_ALREADY_BOOKED)

    check_in, check_out = candidate.check_in_date, candidate.check_out_date
    for booking in existing_for_unit:
        if overlaps(check_in, check_out, booking.check_in_date, booking.check_out_date):
            return Reject(RejectReason.UNIT_OCCUPIED)

    return Accept()


def guest_has_overlapping_booking(
    candidate: BookingCandidate,
    existing_for_guest: Iterable[BookingSnapshot],
) -> bool:
    """
    Date-aware guest check: would the guest be in two units at once?

    Not used by validate_new_booking(), which applies the stricter
    one-booking-per-guest rule.
    """
    check_in, check_out = candidate.check_in_date, candidate.check_out_date
    return any(
        overlaps(check_in, check_out, b.check_in_date, b.check_out_date)
        for b in existing_for_guest
    )


# -------------------------
# Extensions
# -------------------------
def validate_extension(
    existing_booking: BookingSnapshot,
    additional_nights: int,
    other_bookings_for_unit: Iterable[BookingSnapshot],
) -> Outcome:
    """
    Decide whether ``existing_booking`` may be extended by ``additional_nights``.

    Only bookings that start after the extended one can block it: the added
    nights ``[check_out, new_check_out)`` must not reach into their stay.
    ``other_bookings_for_unit`` may include the booking itself; it is skipped
    by id.
    """
    _require_positive_nights(additional_nights, "additional_nights")

    new_check_out = _shift(existing_booking.check_out_date, additional_nights)

    for other in other_bookings_for_unit:
        if other.id == existing_booking.id:
            continue
        starts_later = existing_booking.check_in_date < other.check_in_date
        if starts_later and overlaps(
            existing_booking.check_in_date, new_check_out,
            other.check_in_date, other.check_out_date,
        ):
            return Reject(RejectReason.EXTENSION_CONFLICT)

    return Accept(
        new_check_out_date=new_check_out,
        new_number_of_nights=existing_booking.number_of_nights + additional_nights,
    )

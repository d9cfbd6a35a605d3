"""
Reservation stores.

The booking service talks to persistence only through ``ReservationStore``.
``DjangoReservationStore`` is the real thing; ``InMemoryReservationStore`` is
a drop-in fake for tests and scripts.
"""
from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import replace
from datetime import date
from typing import Dict, Iterator, List, Optional

from django.db import transaction

from .conflicts import BookingCandidate, BookingSnapshot
from .models import Booking, GuestLock, UnitLock


class UnknownBooking(LookupError):
    """Raised by ``ReservationStore.update`` for an id that is not stored."""


class ReservationStore(ABC):
    """Query and mutation primitives used by the booking service.

    Every ``find_*`` returning a list orders it by id.
    """

    @abstractmethod
    def find_by_guest_and_unit(self, guest_name: str, unit_id: str) -> List[BookingSnapshot]:
        ...

    @abstractmethod
    def find_by_guest(self, guest_name: str) -> List[BookingSnapshot]:
        ...

    @abstractmethod
    def find_by_unit(self, unit_id: str) -> List[BookingSnapshot]:
        ...

    @abstractmethod
    def find_by_id(self, booking_id: int) -> Optional[BookingSnapshot]:
        ...

    @abstractmethod
    def create(self, candidate: BookingCandidate) -> BookingSnapshot:
        ...

    @abstractmethod
    def update(self, booking_id: int, *, check_out_date: date, number_of_nights: int) -> BookingSnapshot:
        """Raise ``UnknownBooking`` if ``booking_id`` is not stored."""

    @abstractmethod
    def lock_unit(self, unit_id: str):
        """Context manager serializing read-validate-write for one unit."""

    @abstractmethod
    def lock_guest(self, guest_name: str):
        """Context manager serializing new bookings by one guest."""


def snapshot_of(booking: Booking) -> BookingSnapshot:
    return BookingSnapshot(
        id=booking.pk,
        guest_name=booking.guest_name,
        unit_id=booking.unit_id,
        check_in_date=booking.check_in_date,
        check_out_date=booking.check_out_date,
        number_of_nights=booking.number_of_nights,
    )


class DjangoReservationStore(ReservationStore):
    """ORM-backed store over ``Booking`` rows."""

    def _snapshots(self, **filters) -> List[BookingSnapshot]:
        return [snapshot_of(b) for b in Booking.objects.filter(**filters).order_by("id")]

    def find_by_guest_and_unit(self, guest_name, unit_id):
        return self._snapshots(guest_name=guest_name, unit_id=unit_id)

    def find_by_guest(self, guest_name):
        return self._snapshots(guest_name=guest_name)

    def find_by_unit(self, unit_id):
        return self._snapshots(unit_id=unit_id)

    def find_by_id(self, booking_id):
        booking = Booking.objects.filter(pk=booking_id).first()
        return snapshot_of(booking) if booking else None

    def create(self, candidate):
        booking = Booking.objects.create(
            guest_name=candidate.guest_name,
            unit_id=candidate.unit_id,
            check_in_date=candidate.check_in_date,
            check_out_date=candidate.check_out_date,
            number_of_nights=candidate.number_of_nights,
        )
        return snapshot_of(booking)

    def update(self, booking_id, *, check_out_date, number_of_nights):
        try:
            booking = Booking.objects.get(pk=booking_id)
        except Booking.DoesNotExist:
            raise UnknownBooking(booking_id) from None
        booking.check_out_date = check_out_date
        booking.number_of_nights = number_of_nights
        booking.save(update_fields=["check_out_date", "number_of_nights", "updated_at"])
        return snapshot_of(booking)

    @contextmanager
    def lock_unit(self, unit_id: str) -> Iterator[None]:
        # The lock row exists even while the unit has no bookings, so two
        # first-time bookings for the same unit still queue on it.
        with transaction.atomic():
            UnitLock.objects.select_for_update().get_or_create(unit_id=unit_id)
            yield

    @contextmanager
    def lock_guest(self, guest_name: str) -> Iterator[None]:
        with transaction.atomic():
            GuestLock.objects.select_for_update().get_or_create(guest_name=guest_name)
            yield


class InMemoryReservationStore(ReservationStore):
    """Dict-backed store; ids are assigned sequentially from 1."""

    def __init__(self, bookings=None):
        self._items: Dict[int, BookingSnapshot] = {}
        self._next_id = 1
        self._guard = threading.Lock()
        self._unit_locks = defaultdict(threading.Lock)
        self._guest_locks = defaultdict(threading.Lock)
        for booking in bookings or ():
            self._items[booking.id] = booking
            self._next_id = max(self._next_id, booking.id + 1)

    def _select(self, predicate) -> List[BookingSnapshot]:
        with self._guard:
            return [b for _, b in sorted(self._items.items()) if predicate(b)]

    def find_by_guest_and_unit(self, guest_name, unit_id):
        return self._select(lambda b: b.guest_name == guest_name and b.unit_id == unit_id)

    def find_by_guest(self, guest_name):
        return self._select(lambda b: b.guest_name == guest_name)

    def find_by_unit(self, unit_id):
        return self._select(lambda b: b.unit_id == unit_id)

    def find_by_id(self, booking_id):
        with self._guard:
            return self._items.get(booking_id)

    def create(self, candidate):
        with self._guard:
            booking = BookingSnapshot(
                id=self._next_id,
                guest_name=candidate.guest_name,
                unit_id=candidate.unit_id,
                check_in_date=candidate.check_in_date,
                check_out_date=candidate.check_out_date,
                number_of_nights=candidate.number_of_nights,
            )
            self._items[booking.id] = booking
            self._next_id += 1
            return booking

    def update(self, booking_id, *, check_out_date, number_of_nights):
        with self._guard:
            if booking_id not in self._items:
                raise UnknownBooking(booking_id)
            booking = replace(
                self._items[booking_id],
                check_out_date=check_out_date,
                number_of_nights=number_of_nights,
            )
            self._items[booking_id] = booking
            return booking

    def _lock_for(self, locks, key):
        with self._guard:
            return locks[key]

    @contextmanager
    def lock_unit(self, unit_id: str) -> Iterator[None]:
        with self._lock_for(self._unit_locks, unit_id):
            yield

    @contextmanager
    def lock_guest(self, guest_name: str) -> Iterator[None]:
        with self._lock_for(self._guest_locks, guest_name):
            yield

    def all(self) -> List[BookingSnapshot]:
        return self._select(lambda b: True)

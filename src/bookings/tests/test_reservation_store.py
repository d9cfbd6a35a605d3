from datetime import date, timedelta

import pytest
from django.db import IntegrityError, transaction

from src.bookings.conflicts import BookingCandidate, BookingSnapshot
from src.bookings.factories import BookingFactory
from src.bookings.models import Booking, GuestLock, UnitLock
from src.bookings.store import DjangoReservationStore, InMemoryReservationStore, UnknownBooking, snapshot_of

TODAY = date(2025, 6, 1)


@pytest.mark.django_db
class TestDjangoReservationStore:
    def setup_method(self):
        self.store = DjangoReservationStore()

    def test_create_assigns_id_and_derives_checkout(self):
        booking = self.store.create(BookingCandidate("GuestA", "1", TODAY, 5))

        assert isinstance(booking, BookingSnapshot)
        row = Booking.objects.get(pk=booking.id)
        assert row.check_out_date == TODAY + timedelta(days=5)
        assert row.number_of_nights == 5

    def test_finders_filter_and_order_by_id(self):
        a1 = BookingFactory(guest_name="GuestA", unit_id="1")
        b1 = BookingFactory(guest_name="GuestB", unit_id="1")
        a2 = BookingFactory(guest_name="GuestA", unit_id="2")

        assert [b.id for b in self.store.find_by_unit("1")] == [a1.id, b1.id]
        assert [b.id for b in self.store.find_by_guest("GuestA")] == [a1.id, a2.id]
        assert [b.id for b in self.store.find_by_guest_and_unit("GuestA", "2")] == [a2.id]
        assert self.store.find_by_guest_and_unit("GuestB", "2") == []

    def test_guest_names_match_exactly(self):
        BookingFactory(guest_name="GuestA", unit_id="1")
        assert self.store.find_by_guest("guesta") == []
        assert self.store.find_by_guest("GuestA ") == []

    def test_find_by_id(self):
        booking = BookingFactory()
        assert self.store.find_by_id(booking.id) == snapshot_of(booking)
        assert self.store.find_by_id(booking.id + 1000) is None

    def test_update_changes_checkout_and_nights_only(self):
        booking = BookingFactory(check_in_date=TODAY, number_of_nights=5)

        updated = self.store.update(booking.id, check_out_date=TODAY + timedelta(days=8), number_of_nights=8)

        booking.refresh_from_db()
        assert updated == snapshot_of(booking)
        assert booking.check_in_date == TODAY
        assert booking.check_out_date == TODAY + timedelta(days=8)
        assert booking.number_of_nights == 8

    def test_lock_unit_creates_one_lock_row_per_unit(self):
        with self.store.lock_unit("1"):
            pass
        with self.store.lock_unit("1"):
            pass
        with self.store.lock_unit("2"):
            pass
        assert sorted(UnitLock.objects.values_list("unit_id", flat=True)) == ["1", "2"]

    def test_update_of_unknown_id_raises_unknown_booking(self):
        with pytest.raises(UnknownBooking):
            self.store.update(404, check_out_date=TODAY, number_of_nights=1)

    def test_lock_guest_creates_one_lock_row_per_guest(self):
        with self.store.lock_guest("GuestA"), self.store.lock_unit("1"):
            pass
        with self.store.lock_guest("GuestA"):
            pass
        with self.store.lock_guest("GuestB"):
            pass
        assert sorted(GuestLock.objects.values_list("guest_name", flat=True)) == ["GuestA", "GuestB"]

    def test_lock_unit_rolls_back_on_error(self):
        with pytest.raises(RuntimeError):
            with self.store.lock_unit("1"):
                self.store.create(BookingCandidate("GuestA", "1", TODAY, 2))
                raise RuntimeError("boom")
        assert not Booking.objects.exists()


def test_in_memory_update_of_unknown_id_raises_unknown_booking():
    store = InMemoryReservationStore()
    with pytest.raises(UnknownBooking):
        store.update(1, check_out_date=TODAY, number_of_nights=1)


@pytest.mark.django_db
@pytest.mark.parametrize(
    "fields",
    [
        {"check_in_date": TODAY, "check_out_date": TODAY, "number_of_nights": 1},
        {"check_in_date": TODAY, "check_out_date": TODAY + timedelta(days=1), "number_of_nights": 0},
    ],
)
def test_database_rejects_broken_rows(fields):
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            Booking.objects.create(guest_name="G", unit_id="1", **fields)

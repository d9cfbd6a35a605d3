import random
from datetime import timedelta

import factory
from django.utils import timezone
from factory import LazyAttribute, LazyFunction
from factory.django import DjangoModelFactory

from .conflicts import BookingCandidate, BookingSnapshot
from .models import Booking

GUEST_NAMES = (
    "Ada Lovelace", "Alan Turing", "Grace Hopper", "Edsger Dijkstra",
    "Barbara Liskov", "Donald Knuth", "Margaret Hamilton", "Ken Thompson",
)


def _future_check_in():
    return timezone.localdate() + timedelta(days=random.randint(1, 30))


class BookingFactory(DjangoModelFactory):
    """Stored booking; check_out_date always follows from check-in and nights."""
    class Meta:
        model = Booking

    guest_name = factory.Sequence(lambda n: f"Guest{n}")
    unit_id = factory.Sequence(lambda n: f"unit-{n}")
    check_in_date = LazyFunction(_future_check_in)
    number_of_nights = LazyFunction(lambda: random.randint(1, 7))
    check_out_date = LazyAttribute(lambda o: o.check_in_date + timedelta(days=o.number_of_nights))


class BookingSnapshotFactory(factory.Factory):
    """In-memory booking for rule tests that never hit the database."""
    class Meta:
        model = BookingSnapshot

    id = factory.Sequence(lambda n: n + 1)
    guest_name = factory.Sequence(lambda n: f"Guest{n}")
    unit_id = "1"
    check_in_date = LazyFunction(timezone.localdate)
    number_of_nights = 5
    check_out_date = LazyAttribute(lambda o: o.check_in_date + timedelta(days=o.number_of_nights))


class BookingCandidateFactory(factory.Factory):
    class Meta:
        model = BookingCandidate

    guest_name = factory.Sequence(lambda n: f"NewGuest{n}")
    unit_id = "1"
    check_in_date = LazyFunction(timezone.localdate)
    number_of_nights = 5

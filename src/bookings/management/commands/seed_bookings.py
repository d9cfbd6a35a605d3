from __future__ import annotations

import random
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from src.bookings.exceptions import BookingRejected
from src.bookings.factories import GUEST_NAMES
from src.bookings.models import Booking, UnitLock
from src.bookings.services import get_booking_service


class Command(BaseCommand):
    """
    Seed the database with demo bookings.

    Every booking goes through BookingService, so the seeded data obeys the
    same rules as the API: attempts that would overlap a unit or give a guest
    a second booking are rejected and counted instead of stored.
    """

    help = "Seed the DB with demo bookings created through the booking rules."

    def add_arguments(self, parser):
        parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility.")
        parser.add_argument("--wipe", action="store_true", help="Delete ALL bookings before seeding.")
        parser.add_argument("--units", type=int, default=5, help="How many units to spread bookings over.")
        parser.add_argument("--guests", type=int, default=20, help="How many guests attempt a booking.")
        parser.add_argument("--horizon", type=int, default=30, help="Latest check-in, in days from today.")
        parser.add_argument("--max-nights", type=int, default=7, help="Longest stay to request.")

    @transaction.atomic
    def handle(self, *args, **opts):
        seed = opts.get("seed")
        if seed is not None:
            random.seed(seed)

        if opts["wipe"]:
            self.stdout.write(self.style.WARNING("Wiping ALL bookings..."))
            Booking.objects.all().delete()
            UnitLock.objects.all().delete()

        service = get_booking_service()
        today = timezone.localdate()
        units = [str(n) for n in range(1, opts["units"] + 1)]

        created = rejected = 0
        for n in range(opts["guests"]):
            base = GUEST_NAMES[n % len(GUEST_NAMES)]
            guest = base if n < len(GUEST_NAMES) else f"{base} {n // len(GUEST_NAMES) + 1}"
            try:
                service.create_booking(
                    guest_name=guest,
                    unit_id=random.choice(units),
                    check_in_date=today + timedelta(days=random.randint(0, opts["horizon"])),
                    number_of_nights=random.randint(1, opts["max_nights"]),
                )
            except BookingRejected as exc:
                rejected += 1
                self.stdout.write(f"  skipped {guest!r}: {exc.reason.value}")
            else:
                created += 1

        self.stdout.write(self.style.SUCCESS(
            f"Done. Bookings created: {created}, rejected: {rejected}."
        ))

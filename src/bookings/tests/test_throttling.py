from unittest import mock

from django.urls import reverse
from rest_framework.test import APITestCase

from src.bookings.throttling import ScopedRateThrottleIsolated

# Lower only the scopes under test; the rest keep the configured rates.
TEST_RATES = {
    **ScopedRateThrottleIsolated.THROTTLE_RATES,
    "bookings_mutation": "2/min",
    "availability": "2/min",
}


@mock.patch.object(ScopedRateThrottleIsolated, "THROTTLE_RATES", TEST_RATES)
class BookingThrottleTests(APITestCase):

    def test_booking_mutations_are_throttled(self):
        """Third write within a minute gets 429, whatever its outcome would be."""
        url = reverse("bookings:booking-list")
        payload = {"guest_name": "GuestA", "unit_id": "1", "check_in_date": "2030-01-01", "number_of_nights": 2}
        self.assertEqual(self.client.post(url, payload, format="json").status_code, 201)
        self.assertEqual(self.client.post(url, payload, format="json").status_code, 400)
        self.assertEqual(self.client.post(url, payload, format="json").status_code, 429)

    def test_reads_use_their_own_scope(self):
        url = reverse("bookings:booking-list")
        for _ in range(3):
            self.assertEqual(self.client.get(url).status_code, 200)

    def test_availability_throttling(self):
        url = reverse("bookings:unit-availability", args=["1"])
        self.assertEqual(self.client.get(url).status_code, 200)
        self.assertEqual(self.client.get(url).status_code, 200)
        self.assertEqual(self.client.get(url).status_code, 429)

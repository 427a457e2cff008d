from unittest.mock import patch

from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from booking.exceptions import StoreError
from booking.repositories import GuestRepository
from guest.models import Guest

HEALTH_URL = reverse("health")
GUESTS_URL = reverse("guest:guests-list")


class HealthCheckTests(APITestCase):
    def test_healthy(self):
        Guest.objects.create(name="Jane Doe", email="jane@test.com", phone="5551234567")

        res = self.client.get(HEALTH_URL)

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "healthy")
        self.assertEqual(res.data["database"], {"connected": True})
        self.assertEqual(res.data["stats"], {"guests": 1, "rooms": 0, "bookings": 0})
        self.assertIn("uptime", res.data)

    def test_unhealthy_when_store_fails(self):
        with patch.object(GuestRepository, "count", side_effect=StoreError("down")):
            with self.assertLogs("hotel_booking_service.views", level="ERROR"):
                res = self.client.get(HEALTH_URL)

        self.assertEqual(res.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(res.data["status"], "unhealthy")
        self.assertEqual(res.data["database"], {"connected": False})


class RequestContextTests(APITestCase):
    def test_request_id_is_echoed(self):
        res = self.client.get(GUESTS_URL, HTTP_X_REQUEST_ID="req-42")

        self.assertEqual(res["X-Request-ID"], "req-42")

    @override_settings(API_VERSION="2.3.0")
    def test_generated_request_id_and_version(self):
        with self.assertLogs("hotel_booking_service.middleware", level="INFO") as logs:
            res = self.client.get(GUESTS_URL)

        self.assertEqual(len(res["X-Request-ID"]), 13)
        self.assertEqual(res["API-Version"], "2.3.0")
        self.assertIn("GET /api/guests/ - 200", logs.output[0])

    def test_missing_guest_has_error_body(self):
        res = self.client.get(reverse("guest:guests-detail", args=[12345]))

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(list(res.data), ["error"])


class RateLimitTests(APITestCase):
    @override_settings(API_RATE_LIMITS={"read": "2/min", "write": None})
    def test_reads_are_throttled_per_client(self):
        for _ in range(2):
            self.assertEqual(self.client.get(GUESTS_URL).status_code, status.HTTP_200_OK)

        res = self.client.get(GUESTS_URL)
        other_client = self.client.get(GUESTS_URL, REMOTE_ADDR="10.0.0.9")

        self.assertEqual(res.status_code, status.HTTP_429_TOO_MANY_REQUESTS)
        self.assertEqual(res.data["error"], "Too many requests")
        self.assertGreater(res.data["retryAfter"], 0)
        self.assertIn("Retry-After", res)
        self.assertEqual(other_client.status_code, status.HTTP_200_OK)

    @override_settings(API_RATE_LIMITS={"read": None, "write": "1/min"})
    def test_writes_have_their_own_budget(self):
        payload = {"name": "Jane Doe", "email": "jane@test.com", "phone": "5551234567"}

        first = self.client.post(GUESTS_URL, payload, format="json")
        second = self.client.post(GUESTS_URL, payload, format="json")
        read = self.client.get(GUESTS_URL)

        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertEqual(second.status_code, status.HTTP_429_TOO_MANY_REQUESTS)
        self.assertEqual(read.status_code, status.HTTP_200_OK)

    @override_settings(API_RATE_LIMITS={"read": "1/min", "write": None})
    def test_health_is_never_throttled(self):
        for _ in range(3):
            self.assertEqual(self.client.get(HEALTH_URL).status_code, status.HTTP_200_OK)

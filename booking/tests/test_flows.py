from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from booking.models import Booking
from guest.models import Guest
from room.models import Room


class BookingFlowsTests(APITestCase):
    def setUp(self):
        self.guest = Guest.objects.create(
            name="Jane Doe",
            email="jane@test.com",
            phone="555-123-4567",
        )
        self.room = Room.objects.create(
            room_number="101",
            room_type=Room.RoomType.SINGLE,
            price_per_night=Decimal("100.00"),
            capacity=2,
            is_available=False,
        )

    def create_booking(
        self, booking_status=Booking.BookingStatus.BOOKED, check_in_offset_days=5
    ):
        today = timezone.localdate()
        booking = Booking.objects.create(
            room=self.room,
            guest=self.guest,
            check_in_date=today + timedelta(days=check_in_offset_days),
            check_out_date=today + timedelta(days=check_in_offset_days + 2),
            status=booking_status,
            total_amount=Decimal("200.00"),
        )
        return booking

    def test_cancel_booking_ok(self):
        booking = self.create_booking(booking_status=Booking.BookingStatus.BOOKED)

        url = reverse("booking:booking-cancel", args=[booking.id])
        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"message": "Booking cancelled successfully"})
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.BookingStatus.CANCELLED)
        self.room.refresh_from_db()
        self.assertTrue(self.room.is_available)

    def test_delete_cancels_booking(self):
        booking = self.create_booking()

        response = self.client.delete(reverse("booking:booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.BookingStatus.CANCELLED)
        self.assertTrue(Booking.objects.filter(pk=booking.pk).exists())

    def test_cancel_checked_in_booking_fails(self):
        booking = self.create_booking(booking_status=Booking.BookingStatus.CHECKED_IN)

        response = self.client.delete(reverse("booking:booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data, {"error": "Cannot cancel a booking for a checked-in guest"}
        )
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.BookingStatus.CHECKED_IN)

    def test_cancel_unknown_booking(self):
        response = self.client.delete(reverse("booking:booking-detail", args=[9999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {"error": "Booking not found"})

    def test_check_in_ok(self):
        booking = self.create_booking(check_in_offset_days=0)

        url = reverse("booking:booking-check-in", args=[booking.id])
        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Guest checked in successfully")
        self.assertEqual(response.data["booking"]["status"], "checked_in")
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.BookingStatus.CHECKED_IN)
        self.assertIsNotNone(booking.actual_check_in)

    def test_check_in_via_action_query(self):
        booking = self.create_booking()

        url = reverse("booking:booking-detail", args=[booking.id])
        response = self.client.put(f"{url}?action=checkin")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["booking"]["status"], "checked_in")

    def test_check_in_twice_fails(self):
        booking = self.create_booking(booking_status=Booking.BookingStatus.CHECKED_IN)

        url = reverse("booking:booking-check-in", args=[booking.id])
        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data, {"error": "Only booked reservations can be checked in"}
        )

    def test_check_out_ok(self):
        booking = self.create_booking(booking_status=Booking.BookingStatus.CHECKED_IN)

        url = reverse("booking:booking-check-out", args=[booking.id])
        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Guest checked out successfully")
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.BookingStatus.CHECKED_OUT)
        self.assertIsNotNone(booking.actual_check_out)
        self.room.refresh_from_db()
        self.assertTrue(self.room.is_available)

    def test_check_out_booked_reservation_fails(self):
        booking = self.create_booking()

        url = reverse("booking:booking-detail", args=[booking.id])
        response = self.client.put(f"{url}?action=checkout")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data, {"error": "Only checked-in guests can be checked out"}
        )
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.BookingStatus.BOOKED)

    def test_full_stay(self):
        today = timezone.localdate()
        created = self.client.post(
            reverse("booking:booking-list"),
            {
                "guest_id": self.guest.id,
                "room_id": Room.objects.create(
                    room_number="202",
                    room_type=Room.RoomType.SUITE,
                    capacity=4,
                    price_per_night=Decimal("250.00"),
                ).id,
                "check_in_date": str(today),
                "check_out_date": str(today + timedelta(days=2)),
                "total_amount": "500.00",
            },
            format="json",
        )
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        booking_id = created.data["id"]

        checked_in = self.client.post(reverse("booking:booking-check-in", args=[booking_id]))
        checked_out = self.client.post(reverse("booking:booking-check-out", args=[booking_id]))
        cancelled = self.client.post(reverse("booking:booking-cancel", args=[booking_id]))

        self.assertEqual(checked_in.status_code, status.HTTP_200_OK)
        self.assertEqual(checked_out.status_code, status.HTTP_200_OK)
        self.assertEqual(checked_out.data["booking"]["status"], "checked_out")
        self.assertEqual(cancelled.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(cancelled.data, {"error": "Cannot cancel a completed booking"})
        self.assertTrue(Room.objects.get(room_number="202").is_available)

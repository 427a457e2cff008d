from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from booking.models import Booking
from guest.models import Guest
from room.models import Room


def rooms_url():
    return reverse("room:rooms-list")


def room_detail_url(room_id: int) -> str:
    return reverse("room:rooms-detail", args=[room_id])


def create_room(**params):
    defaults = {
        "room_number": "101",
        "room_type": Room.RoomType.SINGLE,
        "price_per_night": Decimal("50.00"),
        "capacity": 2,
    }
    defaults.update(params)
    return Room.objects.create(**defaults)


class RoomListApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        create_room(room_number="102", room_type=Room.RoomType.DOUBLE,
                    price_per_night=Decimal("90.00"))
        create_room(room_number="101")
        create_room(room_number="201", room_type=Room.RoomType.SUITE,
                    price_per_night=Decimal("300.00"), capacity=4, is_available=False)

    def numbers(self, res):
        return [room["room_number"] for room in res.data]

    def test_list_rooms_ordered_by_number(self):
        res = self.client.get(rooms_url())

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(self.numbers(res), ["101", "102", "201"])
        self.assertEqual(res.data[0]["price_per_night"], "50.00")

    def test_filter_by_availability(self):
        available = self.client.get(rooms_url(), {"available": "true"})
        occupied = self.client.get(rooms_url(), {"available": "false"})

        self.assertEqual(self.numbers(available), ["101", "102"])
        self.assertEqual(self.numbers(occupied), ["201"])

    def test_filter_by_type(self):
        res = self.client.get(rooms_url(), {"room_type": Room.RoomType.DOUBLE})

        self.assertEqual(self.numbers(res), ["102"])

    def test_filter_by_price_range(self):
        res = self.client.get(rooms_url(), {"min_price": "60", "max_price": "300"})

        self.assertEqual(self.numbers(res), ["102", "201"])

    def test_filter_by_capacity(self):
        res = self.client.get(rooms_url(), {"capacity": 4})

        self.assertEqual(self.numbers(res), ["201"])

    def test_skip_and_limit(self):
        res = self.client.get(rooms_url(), {"skip": 1, "limit": 1})

        self.assertEqual(self.numbers(res), ["102"])


class RoomManageApiTests(APITestCase):
    def test_create_room_success(self):
        payload = {
            "room_number": "301",
            "room_type": Room.RoomType.SUITE,
            "price_per_night": "199.99",
            "capacity": 3,
            "is_available": False,
        }

        res = self.client.post(rooms_url(), payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        room = Room.objects.get(room_number="301")
        self.assertTrue(room.is_available)
        self.assertEqual(room.price_per_night, Decimal("199.99"))
        self.assertTrue(res.data["is_available"])

    def test_duplicate_room_number_rejected(self):
        create_room(room_number="301")
        payload = {
            "room_number": "301",
            "room_type": Room.RoomType.SINGLE,
            "price_per_night": "80.00",
            "capacity": 1,
        }

        res = self.client.post(rooms_url(), payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            res.data["details"],
            [{"field": "room_number", "message": "Room number already exists"}],
        )

    def test_invalid_room_fields_reported_together(self):
        payload = {
            "room_number": "302",
            "room_type": "penthouse",
            "price_per_night": "-5",
            "capacity": 25,
        }

        res = self.client.post(rooms_url(), payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        messages = {detail["field"]: detail["message"] for detail in res.data["details"]}
        self.assertEqual(
            messages,
            {
                "room_type": "Room type must be one of: single, double, suite, dorm",
                "price_per_night": "Price per night must be positive",
                "capacity": "Capacity cannot exceed 20",
            },
        )
        self.assertFalse(Room.objects.filter(room_number="302").exists())

    def test_patch_room_success(self):
        room = create_room()

        res = self.client.patch(
            room_detail_url(room.id), {"price_per_night": "75.50"}, format="json"
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        room.refresh_from_db()
        self.assertEqual(room.price_per_night, Decimal("75.50"))

    def test_put_can_reset_availability(self):
        room = create_room(is_available=False)

        res = self.client.put(room_detail_url(room.id), {"is_available": True}, format="json")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        room.refresh_from_db()
        self.assertTrue(room.is_available)

    def test_delete_room_success(self):
        room = create_room()

        res = self.client.delete(room_detail_url(room.id))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, {"message": "Room deleted successfully"})
        self.assertFalse(Room.objects.filter(id=room.id).exists())

    def test_delete_unknown_room(self):
        res = self.client.delete(room_detail_url(9999))

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_room_with_checked_in_booking_refused(self):
        room = create_room(is_available=False)
        guest = Guest.objects.create(name="Jane Doe", email="jane@test.com", phone="5551234567")
        today = timezone.localdate()
        Booking.objects.create(
            guest=guest,
            room=room,
            check_in_date=today,
            check_out_date=today + timedelta(days=2),
            total_amount=Decimal("100.00"),
            status=Booking.BookingStatus.CHECKED_IN,
        )

        res = self.client.delete(room_detail_url(room.id))

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data, {"error": "Cannot delete room with active bookings"})
        self.assertTrue(Room.objects.filter(id=room.id).exists())

"""
Booking lifecycle: conflict detection, status transitions and room
availability side effects.

Operations run as a short sequence of repository calls without a wrapping
transaction. Two steps are best-effort and never fail the operation they
belong to:

* the overlap pre-check on create, when the query itself fails;
* the room availability flip that follows create, check-out and cancel.

Both failures are logged and swallowed; the room flag can therefore drift
from the real booking state until an operator fixes it through the room
update endpoint.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from django.utils import timezone

from booking.exceptions import (
    ActiveBookingsExist,
    BookingConflict,
    InvalidTransition,
    NotFound,
    ReferenceNotFound,
    RoomUnavailable,
    StoreError,
    ValidationError,
)
from booking.models import Booking
from booking.repositories import BookingRepository, GuestRepository, RoomRepository

logger = logging.getLogger(__name__)

Status = Booking.BookingStatus

CANCEL_REFUSALS = {
    Status.CHECKED_IN: "Cannot cancel a booking for a checked-in guest",
    Status.CANCELLED: "Booking is already cancelled",
    Status.CHECKED_OUT: "Cannot cancel a completed booking",
}

CHECK_OUT_BEFORE_CHECK_IN = "Check-out date must be after check-in date"


def dates_overlap(first_start, first_end, second_start, second_end) -> bool:
    """Inclusive range overlap: ranges that share a boundary day overlap."""
    return first_start <= second_end and first_end >= second_start


@dataclass
class SideEffectResult:
    """Outcome of a best-effort write."""

    succeeded: bool
    error: Optional[Exception] = None


class BookingService:
    def __init__(self, bookings=None, rooms=None, guests=None, clock=timezone.now):
        self.bookings = bookings or BookingRepository()
        self.rooms = rooms or RoomRepository()
        self.guests = guests or GuestRepository()
        self.clock = clock

    def create_booking(self, guest_id, room_id, check_in_date, check_out_date,
                       total_amount) -> Booking:
        if self.guests.get(guest_id) is None:
            raise ReferenceNotFound("Guest not found")

        room = self.rooms.get(room_id)
        if room is None:
            raise ReferenceNotFound("Room not found")
        if not room.is_available:
            raise RoomUnavailable("Room is not available")

        conflicts = self._find_conflicts(room_id, check_in_date, check_out_date)
        if conflicts:
            raise BookingConflict("Room is already booked for these dates")

        booking = self.bookings.insert(
            guest_id=guest_id,
            room_id=room_id,
            check_in_date=check_in_date,
            check_out_date=check_out_date,
            total_amount=total_amount,
            status=Status.BOOKED,
        )
        logger.info(
            f"Booking {booking.id} created for guest {guest_id} in room {room_id} "
            f"({check_in_date} - {check_out_date})"
        )

        self._set_room_availability(room_id, False)
        return booking

    def check_in(self, booking_id) -> Booking:
        booking = self._get_booking(booking_id)
        if booking.status != Status.BOOKED:
            raise InvalidTransition(
                booking.status, Status.CHECKED_IN,
                message="Only booked reservations can be checked in",
            )

        booking = self.bookings.update(
            booking.id, status=Status.CHECKED_IN, actual_check_in=self.clock()
        )
        logger.info(f"Booking {booking.id} checked in")
        return booking

    def check_out(self, booking_id) -> Booking:
        booking = self._get_booking(booking_id)
        if booking.status != Status.CHECKED_IN:
            raise InvalidTransition(
                booking.status, Status.CHECKED_OUT,
                message="Only checked-in guests can be checked out",
            )

        room_id = booking.room_id
        booking = self.bookings.update(
            booking.id, status=Status.CHECKED_OUT, actual_check_out=self.clock()
        )
        logger.info(f"Booking {booking.id} checked out")

        self._set_room_availability(room_id, True)
        return booking

    def cancel_booking(self, booking_id) -> Booking:
        booking = self._get_booking(booking_id)
        if booking.status in CANCEL_REFUSALS:
            raise InvalidTransition(
                booking.status, Status.CANCELLED,
                message=CANCEL_REFUSALS[booking.status],
            )

        room_id = booking.room_id
        booking = self.bookings.update(booking.id, status=Status.CANCELLED)
        logger.info(f"Booking {booking.id} cancelled")

        self._set_room_availability(room_id, True)
        return booking

    def update_booking(self, booking_id, **fields) -> Booking:
        """Administrative patch.

        Writes any field, status included, with no transition, conflict or
        availability rule applied. The booking and any newly referenced
        guest or room must exist, and the merged stay must not end before
        it starts.
        """
        booking = self._get_booking(booking_id)

        check_in_date = fields.get("check_in_date", booking.check_in_date)
        check_out_date = fields.get("check_out_date", booking.check_out_date)
        if check_out_date < check_in_date:
            raise ValidationError(
                [{"field": "check_out_date", "message": CHECK_OUT_BEFORE_CHECK_IN}]
            )

        if "guest_id" in fields and self.guests.get(fields["guest_id"]) is None:
            raise ReferenceNotFound("Guest not found")
        if "room_id" in fields and self.rooms.get(fields["room_id"]) is None:
            raise ReferenceNotFound("Room not found")

        booking = self.bookings.update(booking.id, **fields)
        logger.info(f"Booking {booking.id} updated directly: {sorted(fields)}")
        return booking

    def guard_guest_deletion(self, guest_id) -> None:
        if self.bookings.has_active_for(guest_id=guest_id):
            raise ActiveBookingsExist("Cannot delete guest with active bookings")

    def guard_room_deletion(self, room_id) -> None:
        if self.bookings.has_active_for(room_id=room_id):
            raise ActiveBookingsExist("Cannot delete room with active bookings")

    def _get_booking(self, booking_id) -> Booking:
        booking = self.bookings.get(booking_id)
        if booking is None:
            raise NotFound("Booking not found")
        return booking

    def _find_conflicts(self, room_id, check_in_date, check_out_date):
        # Best-effort: a failing query lets the booking through.
        try:
            existing = self.bookings.find_active_overlapping(
                room_id, check_in_date, check_out_date
            )
        except StoreError as exc:
            logger.error(
                f"Conflict check failed for room {room_id}, continuing without it: {exc}"
            )
            return []
        return [
            booking for booking in existing
            if dates_overlap(booking.check_in_date, booking.check_out_date,
                             check_in_date, check_out_date)
        ]

    def _set_room_availability(self, room_id, is_available) -> SideEffectResult:
        if room_id is None:
            return SideEffectResult(succeeded=False)
        try:
            self.rooms.set_availability(room_id, is_available)
        except StoreError as exc:
            logger.error(
                f"Failed to set is_available={is_available} on room {room_id}: {exc}"
            )
            return SideEffectResult(succeeded=False, error=exc)
        return SideEffectResult(succeeded=True)

from typing import Optional


class BookingServiceError(Exception):
    """Base class for every error the booking core reports to its caller."""

    default_message = "Booking operation failed."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(BookingServiceError):
    """Shape or range violation on one or more fields.

    ``errors`` is a list of ``{"field": ..., "message": ...}`` dicts holding
    every violated field, never just the first one.
    """

    default_message = "Validation failed"

    def __init__(self, errors: Optional[list] = None, message: Optional[str] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class ReferenceNotFound(BookingServiceError):
    """A guest or room id given as input does not resolve."""

    default_message = "Referenced record not found"


class NotFound(ReferenceNotFound):
    """The booking the operation targets does not exist."""

    default_message = "Booking not found"


class RoomUnavailable(BookingServiceError):
    default_message = "Room is not available"


class BookingConflict(BookingServiceError):
    default_message = "Room is already booked for these dates"


class InvalidTransition(BookingServiceError):
    """The booking's current status does not allow the requested change."""

    def __init__(
            self,
            current: Optional[str] = None,
            target: Optional[str] = None,
            message: Optional[str] = None
    ) -> None:
        if message is None:
            message = f"Invalid booking status transition: {current} -> {target}"
        super().__init__(message)
        self.current = current
        self.target = target


class ActiveBookingsExist(BookingServiceError):
    """Deletion refused while a booked or checked-in booking references the record."""

    default_message = "Record has active bookings"


class DuplicateKey(BookingServiceError):
    default_message = "A record with this data already exists"


class StoreError(BookingServiceError):
    """Opaque database failure."""

    default_message = "Data store operation failed"

"""
Record stores for the booking core.

``BookingService`` never builds ORM queries itself; it talks to one
repository per record kind. Every database failure leaves this module as a
``StoreError`` (``DuplicateKey`` for unique-constraint violations) so the
service deals with a single error vocabulary regardless of the backend.
"""

import logging
from functools import wraps

from django.db import DatabaseError, IntegrityError
from django.db.models import Q

from booking.exceptions import DuplicateKey, StoreError
from booking.models import Booking
from guest.models import Guest
from room.models import Room

logger = logging.getLogger(__name__)


# Backend wording: SQLite "UNIQUE constraint failed", PostgreSQL "duplicate
# key value violates unique constraint", MySQL "Duplicate entry".
UNIQUE_VIOLATION_MARKERS = ("unique constraint", "duplicate key", "duplicate entry")


def is_unique_violation(exc):
    text = str(exc).lower()
    return any(marker in text for marker in UNIQUE_VIOLATION_MARKERS)


def store_call(method):
    """Translate database exceptions raised by a repository method.

    Unique violations become ``DuplicateKey`` with a generic message; any
    other integrity failure (CHECK, NOT NULL, foreign key) is a ``StoreError``.
    """

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except IntegrityError as exc:
            if is_unique_violation(exc):
                logger.info(f"{self.model.__name__} unique violation in {method.__name__}: {exc}")
                raise DuplicateKey() from exc
            raise StoreError(
                f"{self.model.__name__} integrity failure in {method.__name__}: {exc}"
            ) from exc
        except DatabaseError as exc:
            raise StoreError(
                f"{self.model.__name__} store failure in {method.__name__}: {exc}"
            ) from exc

    return wrapper


class RecordStore:
    """Filtered CRUD over one model.

    Filters are keyword lookups (``status__in=...``, ``check_in_date__lte=...``)
    or a ``Q`` condition for logical OR.
    """

    model = None
    related = ()

    def queryset(self):
        qs = self.model.objects.all()
        if self.related:
            qs = qs.select_related(*self.related)
        return qs

    @store_call
    def find_one(self, *conditions, **filters):
        return self.queryset().filter(*conditions, **filters).first()

    @store_call
    def find_many(self, condition=None, start=0, stop=None, order_by=(), **filters):
        qs = self.queryset().filter(**filters)
        if condition is not None:
            qs = qs.filter(condition)
        if order_by:
            qs = qs.order_by(*order_by)
        return list(qs[start:stop])

    @store_call
    def exists(self, *conditions, **filters):
        return self.model.objects.filter(*conditions, **filters).exists()

    @store_call
    def count(self):
        return self.model.objects.count()

    @store_call
    def insert(self, **fields):
        instance = self.model.objects.create(**fields)
        return self.queryset().get(pk=instance.pk)

    @store_call
    def update(self, pk, **fields):
        """Write ``fields`` on one row and return the fresh row, or ``None``
        when it does not exist."""
        instance = self.model.objects.filter(pk=pk).first()
        if instance is None:
            return None
        for name, value in fields.items():
            setattr(instance, name, value)
        instance.save()
        return self.queryset().get(pk=pk)

    @store_call
    def delete(self, pk):
        deleted, _ = self.model.objects.filter(pk=pk).delete()
        return deleted > 0

    def get(self, pk):
        return self.find_one(pk=pk)


class GuestRepository(RecordStore):
    model = Guest


class RoomRepository(RecordStore):
    model = Room

    @store_call
    def set_availability(self, pk, is_available):
        return self.model.objects.filter(pk=pk).update(is_available=is_available)


class BookingRepository(RecordStore):
    model = Booking
    related = ("guest", "room")

    def find_active_overlapping(self, room_id, check_in_date, check_out_date):
        """Active bookings on ``room_id`` whose dates touch or overlap the
        given range; both boundaries are inclusive."""
        return self.find_many(
            room_id=room_id,
            status__in=Booking.ACTIVE_STATUSES,
            check_in_date__lte=check_out_date,
            check_out_date__gte=check_in_date,
        )

    def has_active_for(self, guest_id=None, room_id=None):
        reference = Q()
        if guest_id is not None:
            reference |= Q(guest_id=guest_id)
        if room_id is not None:
            reference |= Q(room_id=room_id)
        return self.exists(reference, status__in=Booking.ACTIVE_STATUSES)

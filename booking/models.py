from django.db import models
from django.db.models import ForeignKey, Q, F

from guest.models import Guest
from room.models import Room


class Booking(models.Model):
    class BookingStatus(models.TextChoices):
        BOOKED = "booked"
        CHECKED_IN = "checked_in"
        CHECKED_OUT = "checked_out"
        CANCELLED = "cancelled"

    ACTIVE_STATUSES = (BookingStatus.BOOKED, BookingStatus.CHECKED_IN)

    guest = ForeignKey(Guest, on_delete=models.SET_NULL, null=True,
                       related_name="bookings")
    room = ForeignKey(Room, on_delete=models.SET_NULL, null=True,
                      related_name="bookings")
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(choices=BookingStatus, max_length=20,
                              default=BookingStatus.BOOKED)
    actual_check_in = models.DateTimeField(null=True, blank=True)
    actual_check_out = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at",)
        indexes = (
            models.Index(fields=("room", "status"), name="booking_room_status_idx"),
        )
        constraints = (
            models.CheckConstraint(
                condition=Q(check_out_date__gte=F("check_in_date")),
                name="check_out_not_before_check_in",
            ),
            models.CheckConstraint(
                condition=Q(total_amount__gt=0),
                name="booking_total_amount_positive",
            ),
        )

    def __str__(self):
        return f"Booking #{self.pk} ({self.status})"

    @property
    def is_active(self):
        return self.status in self.ACTIVE_STATUSES

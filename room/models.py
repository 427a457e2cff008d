from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q


class Room(models.Model):
    class RoomType(models.TextChoices):
        SINGLE = "single"
        DOUBLE = "double"
        SUITE = "suite"
        DORM = "dorm"

    room_number = models.CharField(max_length=20, unique=True)
    room_type = models.CharField(choices=RoomType, max_length=20)
    capacity = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(20)]
    )
    price_per_night = models.DecimalField(max_digits=10, decimal_places=2)
    is_available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("room_number",)
        constraints = (
            models.CheckConstraint(
                condition=Q(capacity__gte=1) & Q(capacity__lte=20),
                name="room_capacity_range",
            ),
            models.CheckConstraint(
                condition=Q(price_per_night__gt=0),
                name="room_price_positive",
            ),
        )

    def __str__(self):
        return f"Room {self.room_number} ({self.room_type})"

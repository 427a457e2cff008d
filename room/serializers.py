from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from hotel_booking_service.validation import AtLeastOneFieldMixin, money_field
from room.models import Room


class RoomSerializer(serializers.ModelSerializer):
    room_number = serializers.CharField(
        min_length=1,
        max_length=20,
        validators=[
            UniqueValidator(
                queryset=Room.objects.all(), message="Room number already exists"
            )
        ],
        error_messages={"blank": "Room number is required"},
    )
    room_type = serializers.ChoiceField(
        choices=Room.RoomType.choices,
        error_messages={
            "invalid_choice": "Room type must be one of: single, double, suite, dorm",
        },
    )
    capacity = serializers.IntegerField(
        min_value=1,
        max_value=20,
        error_messages={
            "min_value": "Capacity must be at least 1",
            "max_value": "Capacity cannot exceed 20",
        },
    )
    price_per_night = money_field("Price per night")

    class Meta:
        model = Room
        fields = (
            "id",
            "room_number",
            "room_type",
            "capacity",
            "price_per_night",
            "is_available",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "is_available", "created_at", "updated_at")


class RoomUpdateSerializer(AtLeastOneFieldMixin, RoomSerializer):
    """Operator update; may also correct the availability flag by hand."""

    is_available = serializers.BooleanField(required=False)

    class Meta(RoomSerializer.Meta):
        read_only_fields = ("id", "created_at", "updated_at")

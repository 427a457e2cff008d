from collections.abc import Mapping

from django.utils import timezone
from rest_framework import serializers
from rest_framework.exceptions import ErrorDetail

from booking.models import Booking
from booking.services import CHECK_OUT_BEFORE_CHECK_IN
from guest.models import Guest
from hotel_booking_service.validation import AtLeastOneFieldMixin, money_field
from room.models import Room


class GuestSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Guest
        fields = ("id", "name", "email")


class RoomSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = ("id", "room_number", "room_type")


class BookingReadSerializer(serializers.ModelSerializer):
    guest = GuestSummarySerializer(read_only=True)
    room = RoomSummarySerializer(read_only=True)
    total_nights = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = (
            "id",
            "guest_id",
            "room_id",
            "guest",
            "room",
            "check_in_date",
            "check_out_date",
            "total_nights",
            "total_amount",
            "status",
            "actual_check_in",
            "actual_check_out",
            "created_at",
            "updated_at",
        )

    def get_total_nights(self, obj) -> int:
        return (obj.check_out_date - obj.check_in_date).days


class BookingCreateSerializer(serializers.Serializer):
    """Validates a new booking request."""

    guest_id = serializers.IntegerField(
        min_value=1,
        error_messages={
            "invalid": "Guest ID must be a number",
            "min_value": "Guest ID must be positive",
        },
    )
    room_id = serializers.IntegerField(
        min_value=1,
        error_messages={
            "invalid": "Room ID must be a number",
            "min_value": "Room ID must be positive",
        },
    )
    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()
    total_amount = money_field("Total amount")

    def validate_check_in_date(self, value):
        """Validate that check-in date is not in the past."""
        if value < timezone.localdate():
            raise serializers.ValidationError("Check-in date cannot be in the past")
        return value

    def to_internal_value(self, data):
        # DRF skips validate() once a field fails; the stay order is still
        # reported whenever both dates parse.
        try:
            return super().to_internal_value(data)
        except serializers.ValidationError as exc:
            if not isinstance(data, Mapping) or any(
                name in exc.detail for name in ("check_in_date", "check_out_date")
            ):
                raise
            check_in = self.fields["check_in_date"].to_internal_value(data["check_in_date"])
            check_out = self.fields["check_out_date"].to_internal_value(data["check_out_date"])
            if check_out < check_in:
                exc.detail["check_out_date"] = [
                    ErrorDetail(CHECK_OUT_BEFORE_CHECK_IN, code="invalid")
                ]
            raise

    def validate(self, attrs):
        if attrs["check_out_date"] < attrs["check_in_date"]:
            raise serializers.ValidationError(
                {"check_out_date": CHECK_OUT_BEFORE_CHECK_IN}
            )
        return attrs


class BookingUpdateSerializer(AtLeastOneFieldMixin, serializers.Serializer):
    """Administrative patch: any subset of fields, status set directly."""

    guest_id = serializers.IntegerField(min_value=1, required=False)
    room_id = serializers.IntegerField(min_value=1, required=False)
    check_in_date = serializers.DateField(required=False)
    check_out_date = serializers.DateField(required=False)
    total_amount = money_field("Total amount", required=False)
    status = serializers.ChoiceField(
        choices=Booking.BookingStatus.choices,
        required=False,
        error_messages={
            "invalid_choice": "Status must be one of: booked, checked_in, checked_out, cancelled",
        },
    )


class BookingTransitionSerializer(serializers.Serializer):
    message = serializers.CharField()
    booking = BookingReadSerializer()


class MessageSerializer(serializers.Serializer):
    message = serializers.CharField()

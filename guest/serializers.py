from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from guest.models import Guest
from hotel_booking_service.validation import AtLeastOneFieldMixin

PHONE_PATTERN = r"^[\d\s\-\+\(\)]+$"


class GuestSerializer(serializers.ModelSerializer):
    name = serializers.CharField(
        min_length=2,
        max_length=100,
        error_messages={
            "blank": "Name is required",
            "min_length": "Name must be at least 2 characters long",
        },
    )
    email = serializers.EmailField(
        validators=[
            UniqueValidator(
                queryset=Guest.objects.all(), message="Email already registered"
            )
        ],
        error_messages={
            "invalid": "Please provide a valid email address",
            "blank": "Email is required",
        },
    )
    phone = serializers.RegexField(
        PHONE_PATTERN,
        min_length=10,
        max_length=30,
        error_messages={
            "invalid": "Phone number can only contain digits, spaces, hyphens, and parentheses",
            "min_length": "Phone number must be at least 10 digits long",
        },
    )
    address = serializers.CharField(max_length=500, required=False, allow_blank=True)
    id_proof = serializers.CharField(max_length=100, required=False, allow_blank=True)

    class Meta:
        model = Guest
        fields = (
            "id",
            "name",
            "email",
            "phone",
            "address",
            "id_proof",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "created_at", "updated_at")


class GuestUpdateSerializer(AtLeastOneFieldMixin, GuestSerializer):
    """Profile update: every field optional, at least one present."""

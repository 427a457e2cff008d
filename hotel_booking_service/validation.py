"""
Validation helpers shared by the guest, room and booking serializers.

Serializers do the field checks; this module turns their error trees into the
flat ``[{"field": ..., "message": ...}]`` list the API returns, so a client
always receives every violated field at once.
"""

from decimal import Decimal

from rest_framework import serializers
from rest_framework.settings import api_settings

from booking.exceptions import ValidationError

AT_LEAST_ONE_FIELD = "At least one field must be provided"


def flatten_errors(detail, path=""):
    """Walk a DRF error tree and return one entry per message."""
    if isinstance(detail, dict):
        errors = []
        for key, value in detail.items():
            if key == api_settings.NON_FIELD_ERRORS_KEY:
                child = path or "general"
            else:
                child = f"{path}.{key}" if path else str(key)
            errors.extend(flatten_errors(value, child))
        return errors

    if isinstance(detail, (list, tuple)):
        errors = []
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list, tuple)):
                errors.extend(flatten_errors(value, f"{path}.{index}" if path else str(index)))
            else:
                errors.extend(flatten_errors(value, path))
        return errors

    return [{"field": path or "general", "message": str(detail)}]


def validate_payload(serializer_class, data, partial=False, **kwargs):
    """Run ``serializer_class`` over ``data`` and return the normalized values.

    Raises ``ValidationError`` listing every violated field.
    """
    serializer = serializer_class(data=data, partial=partial, **kwargs)
    if not serializer.is_valid():
        raise ValidationError(flatten_errors(serializer.errors))
    return serializer.validated_data


def money_field(label, **kwargs):
    """Positive decimal with at most two decimal places."""
    return serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal("0.01"),
        error_messages={
            "min_value": f"{label} must be positive",
            "max_decimal_places": f"{label} can have maximum 2 decimal places",
            "invalid": f"{label} must be a number",
        },
        **kwargs,
    )


class AtLeastOneFieldMixin:
    """Rejects an update payload that carries no known field."""

    def validate(self, attrs):
        attrs = super().validate(attrs)
        if not attrs:
            raise serializers.ValidationError(AT_LEAST_ONE_FIELD)
        return attrs

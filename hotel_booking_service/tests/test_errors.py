import pytest
from rest_framework import exceptions

from booking.exceptions import (
    ActiveBookingsExist,
    BookingConflict,
    DuplicateKey,
    InvalidTransition,
    NotFound,
    ReferenceNotFound,
    StoreError,
    ValidationError,
)
from hotel_booking_service.exception_handler import api_exception_handler
from hotel_booking_service.throttling import client_ip
from hotel_booking_service.validation import flatten_errors


def test_flatten_errors_keeps_every_message():
    detail = {
        "name": ["Name is required"],
        "non_field_errors": ["At least one field must be provided"],
        "address": {"city": ["Too long", "Invalid"]},
    }

    assert flatten_errors(detail) == [
        {"field": "name", "message": "Name is required"},
        {"field": "general", "message": "At least one field must be provided"},
        {"field": "address.city", "message": "Too long"},
        {"field": "address.city", "message": "Invalid"},
    ]


def test_flatten_errors_plain_message():
    assert flatten_errors("Broken") == [{"field": "general", "message": "Broken"}]


@pytest.mark.parametrize(
    "error, expected_status",
    [
        (ReferenceNotFound("Guest not found"), 400),
        (NotFound(), 404),
        (BookingConflict("Room is already booked for these dates"), 400),
        (InvalidTransition("booked", "checked_out", message="Only checked-in guests can be checked out"), 400),
        (ActiveBookingsExist("Cannot delete room with active bookings"), 400),
        (DuplicateKey("Email already registered"), 409),
    ],
)
def test_service_errors_map_to_status(error, expected_status):
    response = api_exception_handler(error, {})

    assert response.status_code == expected_status
    assert response.data == {"error": error.message}


def test_validation_error_lists_details():
    error = ValidationError([{"field": "email", "message": "Email is required"}])

    response = api_exception_handler(error, {})

    assert response.status_code == 400
    assert response.data == {
        "error": "Validation failed",
        "details": [{"field": "email", "message": "Email is required"}],
    }


def test_store_error_hides_cause(caplog):
    response = api_exception_handler(StoreError("insert failed: disk full"), {})

    assert response.status_code == 500
    assert response.data == {"error": "Internal server error"}
    assert "Store error" in caplog.text


def test_throttled_reports_retry_after():
    response = api_exception_handler(exceptions.Throttled(wait=12), {})

    assert response.status_code == 429
    assert response.data == {"error": "Too many requests", "retryAfter": 12}


def test_drf_error_detail_becomes_error():
    response = api_exception_handler(exceptions.MethodNotAllowed("GET"), {})

    assert response.status_code == 405
    assert response.data == {"error": 'Method "GET" not allowed.'}


def test_client_ip_prefers_forwarded_header(rf):
    request = rf.get("/", HTTP_X_FORWARDED_FOR="203.0.113.7, 10.0.0.1")

    assert client_ip(request) == "203.0.113.7"
    assert client_ip(rf.get("/", HTTP_X_REAL_IP="198.51.100.2")) == "198.51.100.2"
    assert client_ip(rf.get("/")) == "127.0.0.1"

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from booking.exceptions import (
    ActiveBookingsExist,
    BookingConflict,
    BookingServiceError,
    DuplicateKey,
    InvalidTransition,
    NotFound,
    ReferenceNotFound,
    RoomUnavailable,
    StoreError,
    ValidationError,
)
from hotel_booking_service.validation import flatten_errors

logger = logging.getLogger(__name__)

# Most specific class first: NotFound is a ReferenceNotFound.
STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (ReferenceNotFound, status.HTTP_400_BAD_REQUEST),
    (RoomUnavailable, status.HTTP_400_BAD_REQUEST),
    (BookingConflict, status.HTTP_400_BAD_REQUEST),
    (InvalidTransition, status.HTTP_400_BAD_REQUEST),
    (ActiveBookingsExist, status.HTTP_400_BAD_REQUEST),
    (DuplicateKey, status.HTTP_409_CONFLICT),
)


def status_for(exc):
    for error_class, code in STATUS_BY_ERROR:
        if isinstance(exc, error_class):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def service_error_response(exc):
    if isinstance(exc, ValidationError):
        return Response(
            {"error": exc.message, "details": exc.errors},
            status=status.HTTP_400_BAD_REQUEST,
        )
    if isinstance(exc, StoreError):
        logger.exception("Store error", exc_info=exc)
        return Response(
            {"error": "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    code = status_for(exc)
    logger.info(f"{type(exc).__name__}: {exc.message}")
    return Response({"error": exc.message}, status=code)


def api_exception_handler(exc, context):
    """Render every API error as ``{"error": ...}``.

    Service errors carry their own message; DRF errors keep their status code
    and validation failures list every offending field under ``details``.
    """
    if isinstance(exc, BookingServiceError):
        return service_error_response(exc)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            "error": "Validation failed",
            "details": flatten_errors(exc.detail),
        }
    elif isinstance(exc, exceptions.Throttled):
        response.data = {
            "error": "Too many requests",
            "retryAfter": int(exc.wait) if exc.wait is not None else None,
        }
    elif isinstance(response.data, dict) and "detail" in response.data:
        response.data = {"error": str(response.data["detail"])}
    return response

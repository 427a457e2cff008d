from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    OpenApiTypes,
    extend_schema,
)
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from booking.filters import BookingFilter
from booking.models import Booking
from booking.serializers import (
    BookingCreateSerializer,
    BookingReadSerializer,
    BookingTransitionSerializer,
    BookingUpdateSerializer,
    MessageSerializer,
)
from booking.services import BookingService
from hotel_booking_service.validation import validate_payload

CHECK_IN_MESSAGE = "Guest checked in successfully"
CHECK_OUT_MESSAGE = "Guest checked out successfully"
CANCEL_MESSAGE = "Booking cancelled successfully"


class BookingViewSet(viewsets.ModelViewSet):
    """HTTP surface of the booking lifecycle.

    Writes go through ``BookingService``; reads use the ORM queryset so
    django-filter and pagination apply.
    """

    serializer_class = BookingReadSerializer
    queryset = Booking.objects.select_related("guest", "room").order_by("-created_at", "-id")
    filter_backends = [DjangoFilterBackend]
    filterset_class = BookingFilter
    lookup_value_regex = r"\d+"
    http_method_names = ["get", "post", "put", "patch", "delete", "head", "options"]

    @property
    def service(self):
        return BookingService()

    def booking_id(self):
        return int(self.kwargs[self.lookup_field])

    @extend_schema(
        summary="List bookings",
        description=(
            "Bookings ordered by creation time, newest first.\n\n"
            "Filter by status, guest, room and stay dates; window with skip/limit."
        ),
        parameters=[
            OpenApiParameter(
                name="status",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Booking status (booked, checked_in, checked_out, cancelled)",
                required=False,
            ),
            OpenApiParameter(
                name="date_from",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Only bookings with check-in date on or after this date",
                required=False,
            ),
            OpenApiParameter(
                name="date_to",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Only bookings with check-out date on or before this date",
                required=False,
            ),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        summary="Create booking",
        request=BookingCreateSerializer,
        responses={
            201: BookingReadSerializer,
            400: OpenApiResponse(
                description="Validation error, unknown guest or room, "
                            "room unavailable or dates already booked"
            ),
        },
    )
    def create(self, request, *args, **kwargs):
        data = validate_payload(BookingCreateSerializer, request.data)
        booking = self.service.create_booking(**data)
        return Response(BookingReadSerializer(booking).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Update booking or run a check-in / check-out",
        description=(
            "With `action=checkin` or `action=checkout` the request body is ignored "
            "and the lifecycle transition runs.\n\n"
            "Without `action` this is an administrative patch: any field, status "
            "included, is written as given with no lifecycle rule applied."
        ),
        parameters=[
            OpenApiParameter(
                name="action",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                enum=["checkin", "checkout"],
                required=False,
            ),
        ],
        request=BookingUpdateSerializer,
        responses={200: BookingReadSerializer},
    )
    def update(self, request, *args, **kwargs):
        requested = request.query_params.get("action")
        if requested == "checkin":
            return self._transition_response(
                self.service.check_in(self.booking_id()), CHECK_IN_MESSAGE
            )
        if requested == "checkout":
            return self._transition_response(
                self.service.check_out(self.booking_id()), CHECK_OUT_MESSAGE
            )
        if requested:
            return Response(
                {"error": "Unknown action"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        data = validate_payload(BookingUpdateSerializer, request.data, partial=True)
        booking = self.service.update_booking(self.booking_id(), **data)
        return Response(BookingReadSerializer(booking).data, status=status.HTTP_200_OK)

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    @extend_schema(
        summary="Cancel booking",
        description="Bookings are never deleted; only a booked reservation can be cancelled.",
        responses={200: MessageSerializer},
    )
    def destroy(self, request, *args, **kwargs):
        self.service.cancel_booking(self.booking_id())
        return Response({"message": CANCEL_MESSAGE}, status=status.HTTP_200_OK)

    @extend_schema(request=None, responses={200: BookingTransitionSerializer})
    @action(detail=True, methods=["post"], url_path="check-in")
    def check_in(self, request, pk=None):
        return self._transition_response(
            self.service.check_in(self.booking_id()), CHECK_IN_MESSAGE
        )

    @extend_schema(request=None, responses={200: BookingTransitionSerializer})
    @action(detail=True, methods=["post"], url_path="check-out")
    def check_out(self, request, pk=None):
        return self._transition_response(
            self.service.check_out(self.booking_id()), CHECK_OUT_MESSAGE
        )

    @extend_schema(request=None, responses={200: MessageSerializer})
    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request, pk=None):
        self.service.cancel_booking(self.booking_id())
        return Response({"message": CANCEL_MESSAGE}, status=status.HTTP_200_OK)

    def _transition_response(self, booking, message):
        return Response(
            {"message": message, "booking": BookingReadSerializer(booking).data},
            status=status.HTTP_200_OK,
        )

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
    extend_schema_view,
)
from rest_framework import status
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet

from booking.repositories import RoomRepository
from booking.services import BookingService
from room.filters import RoomFilter
from room.models import Room
from room.serializers import RoomSerializer, RoomUpdateSerializer


@extend_schema_view(
    list=extend_schema(
        summary="List rooms",
        description="Ordered by room number.",
        parameters=[
            OpenApiParameter(
                name="available",
                type=OpenApiTypes.BOOL,
                location=OpenApiParameter.QUERY,
                description="Only bookable (true) or occupied (false) rooms",
                required=False,
            ),
            OpenApiParameter(
                name="min_price",
                type=OpenApiTypes.DECIMAL,
                location=OpenApiParameter.QUERY,
                required=False,
            ),
            OpenApiParameter(
                name="max_price",
                type=OpenApiTypes.DECIMAL,
                location=OpenApiParameter.QUERY,
                required=False,
            ),
        ],
    ),
    create=extend_schema(
        summary="Create room",
        responses={
            201: RoomSerializer,
            400: OpenApiResponse(description="Validation error or room number already exists"),
        },
    ),
    update=extend_schema(summary="Update room", request=RoomUpdateSerializer),
    partial_update=extend_schema(summary="Update room", request=RoomUpdateSerializer),
    destroy=extend_schema(
        summary="Delete room",
        description="Refused while the room has a booked or checked-in booking.",
    ),
)
class RoomViewSet(ModelViewSet):
    queryset = Room.objects.all().order_by("room_number")
    serializer_class = RoomSerializer
    filter_backends = (DjangoFilterBackend,)
    filterset_class = RoomFilter
    lookup_value_regex = r"\d+"

    repository = RoomRepository()

    def get_serializer_class(self):
        if self.action in ("update", "partial_update"):
            return RoomUpdateSerializer
        return RoomSerializer

    def perform_create(self, serializer):
        serializer.instance = self.repository.insert(
            is_available=True, **serializer.validated_data
        )

    def update(self, request, *args, **kwargs):
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)

    def perform_update(self, serializer):
        serializer.instance = self.repository.update(
            serializer.instance.pk, **serializer.validated_data
        )

    def destroy(self, request, *args, **kwargs):
        room = self.get_object()
        BookingService().guard_room_deletion(room.pk)
        self.repository.delete(room.pk)
        return Response(
            {"message": "Room deleted successfully"}, status=status.HTTP_200_OK
        )

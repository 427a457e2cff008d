from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import filters, status
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet

from booking.repositories import GuestRepository
from booking.services import BookingService
from guest.models import Guest
from guest.serializers import GuestSerializer, GuestUpdateSerializer


@extend_schema_view(
    list=extend_schema(
        summary="List guests",
        description="Newest first. `search` matches name, email or phone.",
    ),
    create=extend_schema(
        summary="Register guest",
        responses={
            201: GuestSerializer,
            400: OpenApiResponse(description="Validation error or email already registered"),
        },
    ),
    update=extend_schema(summary="Update guest profile", request=GuestUpdateSerializer),
    partial_update=extend_schema(summary="Update guest profile", request=GuestUpdateSerializer),
    destroy=extend_schema(
        summary="Delete guest",
        description="Refused while the guest has a booked or checked-in booking.",
    ),
)
class GuestViewSet(ModelViewSet):
    queryset = Guest.objects.all().order_by("-created_at")
    serializer_class = GuestSerializer
    filter_backends = (filters.SearchFilter,)
    search_fields = ("name", "email", "phone")
    lookup_value_regex = r"\d+"

    repository = GuestRepository()

    def get_serializer_class(self):
        if self.action in ("update", "partial_update"):
            return GuestUpdateSerializer
        return GuestSerializer

    def perform_create(self, serializer):
        serializer.instance = self.repository.insert(**serializer.validated_data)

    def update(self, request, *args, **kwargs):
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)

    def perform_update(self, serializer):
        serializer.instance = self.repository.update(
            serializer.instance.pk, **serializer.validated_data
        )

    def destroy(self, request, *args, **kwargs):
        guest = self.get_object()
        BookingService().guard_guest_deletion(guest.pk)
        self.repository.delete(guest.pk)
        return Response(
            {"message": "Guest deleted successfully"}, status=status.HTTP_200_OK
        )

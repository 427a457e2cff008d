import logging
import time

from django.conf import settings
from django.utils import timezone
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from booking.exceptions import StoreError
from booking.repositories import BookingRepository, GuestRepository, RoomRepository

logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()


def table_stats():
    return {
        "guests": GuestRepository().count(),
        "rooms": RoomRepository().count(),
        "bookings": BookingRepository().count(),
    }


@extend_schema(
    summary="Health check",
    description="Service liveness plus a database round trip with record counts.",
    responses={
        200: OpenApiResponse(description="Service and database reachable"),
        503: OpenApiResponse(description="Database unreachable"),
    },
)
class HealthCheckView(APIView):
    throttle_classes = []

    def get(self, request):
        payload = {
            "status": "healthy",
            "timestamp": timezone.now().isoformat(),
            "uptime": round(time.monotonic() - STARTED_AT, 3),
            "environment": settings.ENVIRONMENT,
            "version": settings.API_VERSION,
        }
        try:
            payload["stats"] = table_stats()
        except StoreError as exc:
            logger.error(f"Health check could not reach the database: {exc}")
            payload.update(status="unhealthy", database={"connected": False})
            return Response(payload, status=status.HTTP_503_SERVICE_UNAVAILABLE)

        payload["database"] = {"connected": True}
        return Response(payload, status=status.HTTP_200_OK)

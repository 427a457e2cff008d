import logging
import time
import uuid

from django.conf import settings

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware:
    """Tags every response with a request id and the API version, and logs
    the request line with status and duration."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:13]
        request.request_id = request_id
        started = time.monotonic()

        response = self.get_response(request)

        duration_ms = (time.monotonic() - started) * 1000
        response[REQUEST_ID_HEADER] = request_id
        response["API-Version"] = settings.API_VERSION
        logger.info(
            f"{request.method} {request.get_full_path()} - "
            f"{response.status_code} - {duration_ms:.0f}ms [{request_id}]"
        )
        return response

from django.conf import settings
from rest_framework.throttling import SimpleRateThrottle

WRITE_METHODS = ("POST", "PUT", "PATCH", "DELETE")


def client_ip(request):
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return (
        request.META.get("HTTP_X_REAL_IP")
        or request.META.get("REMOTE_ADDR")
        or "unknown"
    )


class ClientRateThrottle(SimpleRateThrottle):
    """Per-IP throttle whose rate is looked up in ``settings.API_RATE_LIMITS``
    on every request, so a ``None`` rate switches it off."""

    scope = None

    def get_rate(self):
        return settings.API_RATE_LIMITS.get(self.scope)

    def applies_to(self, request):
        raise NotImplementedError

    def allow_request(self, request, view):
        if not self.applies_to(request):
            return True
        return super().allow_request(request, view)

    def get_cache_key(self, request, view):
        return self.cache_format % {"scope": self.scope, "ident": client_ip(request)}


class ReadRateThrottle(ClientRateThrottle):
    scope = "read"

    def applies_to(self, request):
        return request.method not in WRITE_METHODS


class WriteRateThrottle(ClientRateThrottle):
    scope = "write"

    def applies_to(self, request):
        return request.method in WRITE_METHODS

from rest_framework.pagination import LimitOffsetPagination
from rest_framework.response import Response


class SkipLimitPagination(LimitOffsetPagination):
    """``?skip=&limit=`` windowing that answers a bare JSON array."""

    offset_query_param = "skip"
    limit_query_param = "limit"
    default_limit = 100
    max_limit = 1000

    def get_paginated_response(self, data):
        return Response(data)

    def get_paginated_response_schema(self, schema):
        return schema

import django_filters

from room.models import Room


class RoomFilter(django_filters.FilterSet):
    available = django_filters.BooleanFilter(field_name="is_available")
    room_type = django_filters.ChoiceFilter(choices=Room.RoomType.choices)
    min_price = django_filters.NumberFilter(
        field_name="price_per_night", lookup_expr="gte"
    )
    max_price = django_filters.NumberFilter(
        field_name="price_per_night", lookup_expr="lte"
    )

    class Meta:
        model = Room
        fields = ["room_type", "capacity"]

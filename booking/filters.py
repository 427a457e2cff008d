import django_filters

from booking.models import Booking


class BookingFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Booking.BookingStatus.choices)
    guest_id = django_filters.NumberFilter(field_name="guest_id")
    room_id = django_filters.NumberFilter(field_name="room_id")
    date_from = django_filters.DateFilter(
        field_name="check_in_date", lookup_expr="gte"
    )
    date_to = django_filters.DateFilter(
        field_name="check_out_date", lookup_expr="lte"
    )

    class Meta:
        model = Booking
        fields = ["status", "guest_id", "room_id"]

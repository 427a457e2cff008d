from django.contrib import admin

from booking.models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "room",
        "guest",
        "check_in_date",
        "check_out_date",
        "status",
        "total_amount",
        "actual_check_in",
        "actual_check_out",
    )

    list_filter = (
        "status",
        "check_in_date",
        "check_out_date",
        "room",
    )

    search_fields = (
        "guest__email",
        "guest__name",
        "room__room_number",
    )

    readonly_fields = ("created_at", "updated_at")

    ordering = ("-check_in_date",)

from django.contrib import admin

from room.models import Room


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("id", "room_number", "room_type", "capacity", "price_per_night", "is_available")
    search_fields = ("room_number",)
    list_filter = ("room_type", "capacity", "is_available")

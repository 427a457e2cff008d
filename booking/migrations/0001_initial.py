import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("guest", "0001_initial"),
        ("room", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("check_in_date", models.DateField()),
                ("check_out_date", models.DateField()),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=10)),
                ("status", models.CharField(choices=[("booked", "Booked"), ("checked_in", "Checked In"), ("checked_out", "Checked Out"), ("cancelled", "Cancelled")], default="booked", max_length=20)),
                ("actual_check_in", models.DateTimeField(blank=True, null=True)),
                ("actual_check_out", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("guest", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="bookings", to="guest.guest")),
                ("room", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="bookings", to="room.room")),
            ],
            options={
                "ordering": ("-created_at",),
                "indexes": [models.Index(fields=["room", "status"], name="booking_room_status_idx")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("check_out_date__gte", models.F("check_in_date"))), name="check_out_not_before_check_in"),
                    models.CheckConstraint(condition=models.Q(("total_amount__gt", 0)), name="booking_total_amount_positive"),
                ],
            },
        ),
    ]

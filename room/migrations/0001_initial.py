import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Room",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("room_number", models.CharField(max_length=20, unique=True)),
                ("room_type", models.CharField(choices=[("single", "Single"), ("double", "Double"), ("suite", "Suite"), ("dorm", "Dorm")], max_length=20)),
                ("capacity", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(20)])),
                ("price_per_night", models.DecimalField(decimal_places=2, max_digits=10)),
                ("is_available", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ("room_number",),
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("capacity__gte", 1), ("capacity__lte", 20)), name="room_capacity_range"),
                    models.CheckConstraint(condition=models.Q(("price_per_night__gt", 0)), name="room_price_positive"),
                ],
            },
        ),
    ]

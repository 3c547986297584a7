import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("customer_name", models.CharField(max_length=100)),
                ("customer_phone", models.CharField(max_length=20)),
                ("start_time", models.DateTimeField()),
                ("end_time", models.DateTimeField()),
                ("status", models.CharField(choices=[("PENDING", "Pending"), ("CONFIRMED", "Confirmed"), ("CANCELLED", "Cancelled"), ("COMPLETED", "Completed")], default="PENDING", max_length=20)),
                ("charge", models.DecimalField(decimal_places=2, default=Decimal("500"), max_digits=10)),
                ("notes", models.TextField(blank=True, default="")),
                ("is_recurring", models.BooleanField(default=False)),
                ("recurring_days", models.CharField(blank=True, default="", max_length=32)),
                ("recurring_end_date", models.DateTimeField(blank=True, null=True)),
                ("parent_booking_id", models.CharField(blank=True, db_index=True, default="", max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="bookings", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["start_time"],
                "indexes": [models.Index(fields=["start_time", "end_time"], name="booking_interval_idx")],
            },
        ),
    ]

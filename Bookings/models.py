from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from .constants import DEFAULT_CHARGE, BookingStatus


# =========================
# BOOKING MODEL
# =========================

class Booking(models.Model):
    """
    A single reservation of the turf.

    Instances created from one recurring request share a
    parent_booking_id and carry a copy of the recurrence rule.
    """

    customer_name = models.CharField(max_length=100)
    customer_phone = models.CharField(max_length=20)

    start_time = models.DateTimeField()
    end_time = models.DateTimeField()

    status = models.CharField(
        max_length=20,
        choices=BookingStatus.CHOICES,
        default=BookingStatus.PENDING
    )

    charge = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=DEFAULT_CHARGE
    )

    notes = models.TextField(blank=True, default="")

    # Recurrence metadata (empty for one-off bookings)
    is_recurring = models.BooleanField(default=False)
    recurring_days = models.CharField(max_length=32, blank=True, default="")
    recurring_end_date = models.DateTimeField(null=True, blank=True)
    parent_booking_id = models.CharField(
        max_length=64,
        blank=True,
        default="",
        db_index=True
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="bookings"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_time"]
        # Overlap lookups filter on both interval ends
        indexes = [
            models.Index(fields=["start_time", "end_time"], name="booking_interval_idx"),
        ]

    def clean(self):
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValidationError("End time must be after start time")

    def __str__(self):
        return f"{self.customer_name} | {self.start_time:%Y-%m-%d %H:%M} | {self.status}"

# bookings/admin.py

from django.contrib import admin

from .models import Booking


# -------------------------------
# BOOKING ADMIN
# -------------------------------
# Admin view for all turf bookings (critical operational view)
@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "customer_name",
        "customer_phone",
        "start_time",
        "end_time",
        "status",
        "charge",
        "is_recurring",
        "created_by",
    )

    list_filter = (
        "status",
        "is_recurring",
        "start_time",
    )

    # Search by customer or by series
    search_fields = (
        "customer_name",
        "customer_phone",
        "parent_booking_id",
    )

    date_hierarchy = "start_time"

    readonly_fields = (
        "parent_booking_id",
        "recurring_days",
        "recurring_end_date",
        "created_at",
        "updated_at",
    )

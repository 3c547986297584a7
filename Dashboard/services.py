from collections import Counter
from datetime import datetime, time, timedelta
from decimal import Decimal

from django.db.models import Count, Max, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from Bookings.constants import BookingStatus
from Bookings.models import Booking
from Bookings.utils import sunday_first_weekday
from Expenses.constants import ExpenseCategory
from Expenses.models import Expense

# Bookings that count as earned money
REVENUE_STATUSES = (BookingStatus.CONFIRMED, BookingStatus.COMPLETED)

POPULARITY_BLOCK_HOURS = 2
TOP_CUSTOMERS_LIMIT = 10


def _hour_label(hour):
    display = 12 if hour % 12 == 0 else hour % 12
    return f"{display}{'AM' if hour < 12 else 'PM'}"


class AdminDashboardService:
    """
    All dashboard-related queries live here.
    Views should NOT touch the database directly.
    """

    @staticmethod
    def get_profile(admin_user):
        return {
            "id": f"ADM-{admin_user.id}",
            "name": admin_user.name or "Admin",
            "email": admin_user.email,
            "role": admin_user.role,
        }

    @staticmethod
    def get_financial_summary():
        booking_revenue = (
            Booking.objects
            .filter(status__in=REVENUE_STATUSES)
            .aggregate(total=Sum("charge"))["total"]
            or Decimal("0")
        )

        total_expenses = (
            Expense.objects.aggregate(total=Sum("amount"))["total"]
            or Decimal("0")
        )

        by_category = {
            row["category"]: float(row["total"])
            for row in (
                Expense.objects
                .values("category")
                .annotate(total=Sum("amount"))
                .order_by()
            )
        }

        return {
            "booking_revenue": float(booking_revenue),
            "total_expenses": float(total_expenses),
            "net_profit": float(booking_revenue - total_expenses),
            "expenses_by_category": {
                category: by_category.get(category, 0.0)
                for category, _ in ExpenseCategory.CHOICES
            },
        }

    @staticmethod
    def get_weekly_stats(now=None):
        today = timezone.localdate(now or timezone.now())
        week_start = today - timedelta(days=sunday_first_weekday(today))

        start = timezone.make_aware(
            datetime.combine(week_start, time.min)
        )
        end = start + timedelta(days=7)

        rows = (
            Booking.objects
            .filter(start_time__gte=start, start_time__lt=end)
            .exclude(status=BookingStatus.CANCELLED)
            .values_list("start_time", "charge")
        )

        counts = Counter()
        revenue = Counter()
        for start_time, charge in rows:
            day = timezone.localtime(start_time).date()
            counts[day] += 1
            revenue[day] += charge

        stats = []
        for offset in range(7):
            day = week_start + timedelta(days=offset)
            stats.append({
                "day": day.strftime("%a"),
                "date": day.isoformat(),
                "count": counts[day],
                "revenue": float(revenue[day]),
            })
        return stats

    @staticmethod
    def get_time_slot_popularity():
        start_times = (
            Booking.objects
            .exclude(status=BookingStatus.CANCELLED)
            .values_list("start_time", flat=True)
        )

        counts = Counter()
        total = 0
        for start_time in start_times:
            hour = timezone.localtime(start_time).hour
            counts[hour - hour % POPULARITY_BLOCK_HOURS] += 1
            total += 1

        slots = [
            {
                "time": _hour_label(hour),
                "count": counts[hour],
                "percentage": (counts[hour] / total) * 100 if total else 0,
            }
            for hour in range(0, 24, POPULARITY_BLOCK_HOURS)
        ]
        return sorted(slots, key=lambda slot: slot["count"], reverse=True)

    @staticmethod
    def get_status_breakdown():
        counts = dict(
            Booking.objects
            .values_list("status")
            .annotate(count=Count("id"))
            .order_by()
        )
        total = sum(counts.values()) or 1

        return [
            {
                "status": label,
                "count": counts.get(value, 0),
                "percentage": (counts.get(value, 0) / total) * 100,
            }
            for value, label in BookingStatus.CHOICES
        ]

    @staticmethod
    def get_top_customers(limit=TOP_CUSTOMERS_LIMIT):
        rows = (
            Booking.objects
            .exclude(status=BookingStatus.CANCELLED)
            .values("customer_phone")
            .annotate(count=Count("id"), name=Max("customer_name"))
            .order_by("-count", "customer_phone")[:limit]
        )

        return [
            {
                "name": row["name"],
                "phone": row["customer_phone"],
                "count": row["count"],
            }
            for row in rows
        ]

    @staticmethod
    def get_monthly_revenue():
        monthly_revenue = (
            Booking.objects
            .filter(status__in=REVENUE_STATUSES)
            .annotate(month=TruncMonth("start_time"))
            .values("month")
            .annotate(total=Sum("charge"))
            .order_by("month")
        )

        return [
            {
                "month": row["month"].strftime("%Y-%m"),
                "total": float(row["total"]),
            }
            for row in monthly_revenue
        ]

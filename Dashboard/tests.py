from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APITestCase

from Accounts.models import User
from Bookings.constants import BookingStatus
from Bookings.models import Booking
from Expenses.constants import ExpenseCategory
from Expenses.models import Expense
from .services import AdminDashboardService


def utc(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


def book(start, status=BookingStatus.CONFIRMED, charge="500", phone="9876543211", name="Rahul"):
    return Booking.objects.create(
        customer_name=name,
        customer_phone=phone,
        start_time=start,
        end_time=start.replace(hour=start.hour + 1),
        status=status,
        charge=Decimal(charge),
    )


@override_settings(TIME_ZONE="UTC")
class DashboardServiceTests(TestCase):

    def setUp(self):
        book(utc(2024, 6, 3, 18))
        book(utc(2024, 6, 4, 18), status=BookingStatus.COMPLETED, charge="700")
        book(utc(2024, 6, 5, 9), status=BookingStatus.PENDING, phone="9876543212", name="Amit")
        book(utc(2024, 7, 1, 19), status=BookingStatus.CANCELLED, phone="9876543212", name="Amit")

        Expense.objects.create(
            title="Electricity", amount=Decimal("300"), category=ExpenseCategory.ELECTRICITY
        )

    def test_financial_summary_counts_earned_revenue_only(self):
        summary = AdminDashboardService.get_financial_summary()

        self.assertEqual(summary["booking_revenue"], 1200.0)
        self.assertEqual(summary["total_expenses"], 300.0)
        self.assertEqual(summary["net_profit"], 900.0)
        self.assertEqual(summary["expenses_by_category"][ExpenseCategory.ELECTRICITY], 300.0)
        self.assertEqual(summary["expenses_by_category"][ExpenseCategory.WATER], 0.0)

    def test_weekly_stats_start_on_sunday(self):
        stats = AdminDashboardService.get_weekly_stats(now=utc(2024, 6, 5, 12))

        self.assertEqual(len(stats), 7)
        self.assertEqual(stats[0]["date"], "2024-06-02")
        self.assertEqual([day["count"] for day in stats], [0, 1, 1, 1, 0, 0, 0])
        self.assertEqual(stats[2]["revenue"], 700.0)

    def test_time_slot_popularity_ignores_cancelled(self):
        slots = AdminDashboardService.get_time_slot_popularity()

        self.assertEqual(slots[0]["time"], "6PM")
        self.assertEqual(slots[0]["count"], 2)
        self.assertEqual(sum(slot["count"] for slot in slots), 3)

    def test_status_breakdown(self):
        breakdown = {row["status"]: row["count"] for row in AdminDashboardService.get_status_breakdown()}

        self.assertEqual(breakdown["Confirmed"], 1)
        self.assertEqual(breakdown["Cancelled"], 1)
        self.assertEqual(sum(breakdown.values()), 4)

    def test_top_customers_by_active_bookings(self):
        customers = AdminDashboardService.get_top_customers()

        self.assertEqual(customers[0], {"name": "Rahul", "phone": "9876543211", "count": 2})
        self.assertEqual(customers[1]["count"], 1)

    def test_monthly_revenue(self):
        self.assertEqual(
            AdminDashboardService.get_monthly_revenue(),
            [{"month": "2024-06", "total": 1200.0}],
        )


class DashboardAPITests(APITestCase):

    def test_requires_auth(self):
        response = self.client.get(reverse("admin-dashboard"))
        self.assertEqual(response.status_code, 401)

    def test_dashboard_payload(self):
        owner = User.objects.create_owner(email="owner@turf.test", password="owner-pass-123")
        self.client.force_authenticate(owner)

        response = self.client.get(reverse("admin-dashboard"))

        self.assertEqual(response.status_code, 200)
        data = response.data["data"]
        self.assertEqual(data["profile"]["id"], f"ADM-{owner.id}")
        self.assertEqual(data["analytics"]["summary"]["net_profit"], 0.0)
        self.assertEqual(len(data["analytics"]["weekly_stats"]), 7)

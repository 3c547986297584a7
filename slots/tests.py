from datetime import date, datetime, time, timedelta

from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APITestCase

from Bookings.constants import BookingStatus
from Bookings.models import Booking
from Facility.models import FacilitySettings
from .constants import SlotStatus
from .services import build_date_selector, build_day_slots, day_label, generate_blocks


def local(day, hour, minute=0):
    return timezone.make_aware(datetime.combine(day, time(hour, minute)))


@override_settings(TIME_ZONE="UTC")
class SlotServiceTests(TestCase):

    def setUp(self):
        self.day = date(2024, 6, 3)

    def book(self, start, end, status=BookingStatus.CONFIRMED, **extra):
        return Booking.objects.create(
            customer_name="Rahul",
            customer_phone="9876543211",
            start_time=start,
            end_time=end,
            status=status,
            **extra
        )

    def slot_statuses(self):
        slots = build_day_slots(self.day, self.day, FacilitySettings.load().default_price)["slots"]
        return {slot["id"]: slot["status"] for slot in slots}

    def test_day_is_twelve_two_hour_blocks(self):
        blocks = generate_blocks(self.day)

        self.assertEqual(len(blocks), 12)
        self.assertEqual(blocks[0][0], local(self.day, 0))
        self.assertEqual(blocks[-1][1], local(self.day + timedelta(days=1), 0))
        self.assertTrue(all(end - start == timedelta(hours=2) for start, end in blocks))

    def test_booking_inside_block_marks_it_booked(self):
        self.book(local(self.day, 10), local(self.day, 11), is_recurring=True)

        slots = build_day_slots(self.day, self.day, FacilitySettings.load().default_price)["slots"]
        booked = [slot for slot in slots if slot["status"] == SlotStatus.BOOKED]

        self.assertEqual([slot["id"] for slot in booked], ["slot_06"])
        self.assertFalse(booked[0]["is_selectable"])
        self.assertTrue(booked[0]["booking"]["is_recurring"])
        self.assertIsNone(booked[0]["price_display"])

    def test_cancelled_booking_leaves_block_available(self):
        self.book(local(self.day, 10), local(self.day, 11), status=BookingStatus.CANCELLED)

        self.assertEqual(set(self.slot_statuses().values()), {SlotStatus.AVAILABLE})

    def test_available_block_shows_default_price(self):
        slots = build_day_slots(self.day, self.day, FacilitySettings.load().default_price)["slots"]
        self.assertEqual(slots[0]["price_display"], "₹500.00")

    def test_day_labels(self):
        self.assertEqual(day_label(self.day, self.day), "Today")
        self.assertEqual(day_label(self.day + timedelta(days=1), self.day), "Tomorrow")
        self.assertEqual(day_label(self.day + timedelta(days=2), self.day), "Wednesday")

    def test_date_selector_starts_the_day_before(self):
        selector = build_date_selector(self.day)

        self.assertEqual(len(selector["days"]), 6)
        self.assertEqual(selector["days"][0]["full_date"], "2024-06-02")
        self.assertTrue(selector["days"][1]["is_selected"])
        self.assertEqual(selector["month_label"], "June 2024")


@override_settings(TIME_ZONE="UTC")
class SlotAPITests(APITestCase):

    def test_public_listing(self):
        response = self.client.get(reverse("slot-list"), {"date": "2024-06-03"})

        self.assertEqual(response.status_code, 200)
        data = response.data["data"]
        self.assertEqual(data["turf_details"]["name"], "FS Sports Club")
        self.assertEqual([day["date"] for day in data["days"]], ["2024-06-03", "2024-06-04"])
        self.assertEqual(len(data["days"][0]["slots"]), 12)

    def test_defaults_to_today(self):
        response = self.client.get(reverse("slot-list"))
        self.assertEqual(
            response.data["data"]["date_selector"]["current_date"],
            timezone.localdate().isoformat(),
        )

    def test_bad_date_is_400(self):
        response = self.client.get(reverse("slot-list"), {"date": "someday"})
        self.assertEqual(response.status_code, 400)

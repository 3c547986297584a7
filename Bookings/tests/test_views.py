from datetime import datetime, time, timedelta, timezone as dt_timezone
from decimal import Decimal
from unittest import mock

from django.core.cache import cache
from django.test import override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework.throttling import ScopedRateThrottle

from Accounts.models import User
from Bookings.constants import BookingStatus
from Bookings.models import Booking


def next_monday_at(hour):
    today = timezone.now().date()
    monday = today + timedelta(days=7 - today.weekday())
    return datetime.combine(monday, time(hour), tzinfo=dt_timezone.utc)


@override_settings(TIME_ZONE="UTC")
class BookingAPITestBase(APITestCase):

    def setUp(self):
        cache.clear()
        self.owner = User.objects.create_owner(
            email="owner@turf.test", password="owner-pass-123", name="Owner"
        )
        self.start = next_monday_at(9)

    def recurring_payload(self, **overrides):
        payload = {
            "customerName": "Rahul Sharma",
            "customerPhone": "9876543211",
            "startTime": self.start.isoformat(),
            "endTime": (self.start + timedelta(hours=1)).isoformat(),
            "recurringDays": [1, 3, 5],
            "recurringEndDate": (self.start + timedelta(days=11)).isoformat(),
            "notes": "Weekly practice",
        }
        payload.update(overrides)
        return payload


class RecurringCreateAPITests(BookingAPITestBase):

    def test_anonymous_series_is_attributed_to_owner(self):
        response = self.client.post(
            reverse("booking-recurring"), self.recurring_payload(), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["bookings"], 6)
        self.assertEqual(len(response.data["dates"]), 6)
        self.assertTrue(response.data["parentBookingId"].startswith("recurring-"))

        bookings = Booking.objects.filter(parent_booking_id=response.data["parentBookingId"])
        self.assertEqual(bookings.count(), 6)
        self.assertTrue(all(b.created_by_id == self.owner.id for b in bookings))

    def test_authenticated_series_is_attributed_to_caller(self):
        subadmin = User.objects.create_user(email="sub@turf.test", password="sub-pass-123")
        self.client.force_authenticate(subadmin)

        response = self.client.post(
            reverse("booking-recurring"), self.recurring_payload(), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(
            set(Booking.objects.values_list("created_by_id", flat=True)), {subadmin.id}
        )

    def test_missing_owner_is_configuration_error(self):
        self.owner.delete()

        response = self.client.post(
            reverse("booking-recurring"), self.recurring_payload(), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(
            response.data["error"], "System configuration error: No admin user found"
        )
        self.assertEqual(Booking.objects.count(), 0)

    def test_conflict_returns_409_with_count(self):
        wednesday = self.start + timedelta(days=2)
        Booking.objects.create(
            customer_name="Priya Singh",
            customer_phone="9876543213",
            start_time=wednesday + timedelta(minutes=30),
            end_time=wednesday + timedelta(minutes=45),
            status=BookingStatus.CONFIRMED,
        )

        response = self.client.post(
            reverse("booking-recurring"), self.recurring_payload(), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["conflicts"], 1)
        self.assertIn("conflict", response.data["error"])
        self.assertEqual(Booking.objects.count(), 1)

    def test_empty_days_is_400(self):
        response = self.client.post(
            reverse("booking-recurring"),
            self.recurring_payload(recurringDays=[]),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("error", response.data)

    def test_range_over_six_months_is_400(self):
        response = self.client.post(
            reverse("booking-recurring"),
            self.recurring_payload(
                recurringEndDate=(self.start + timedelta(days=200)).isoformat()
            ),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Recurring bookings limited to 6 months")

    def test_malformed_payload_reports_field_details(self):
        response = self.client.post(
            reverse("booking-recurring"),
            self.recurring_payload(startTime="not-a-date"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Validation error")
        self.assertIn("startTime", response.data["details"])

    def test_post_requests_are_throttled(self):
        with mock.patch.object(ScopedRateThrottle, "THROTTLE_RATES", {"bookings": "2/min"}):
            codes = [
                self.client.post(
                    reverse("booking-recurring"),
                    self.recurring_payload(recurringDays=[]),
                    format="json",
                ).status_code
                for _ in range(3)
            ]

        self.assertEqual(codes, [400, 400, 429])


class RecurringSeriesAPITests(BookingAPITestBase):

    def setUp(self):
        super().setUp()
        response = self.client.post(
            reverse("booking-recurring"), self.recurring_payload(), format="json"
        )
        self.parent_id = response.data["parentBookingId"]

    def test_series_lookup_requires_auth(self):
        response = self.client.get(
            reverse("booking-recurring"), {"parentBookingId": self.parent_id}
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_series_lookup(self):
        self.client.force_authenticate(self.owner)

        response = self.client.get(
            reverse("booking-recurring"), {"parentBookingId": self.parent_id}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["bookings"]), 6)
        self.assertEqual(response.data["bookings"][0]["recurringDays"], [1, 3, 5])

    def test_cancel_all(self):
        self.client.force_authenticate(self.owner)
        url = reverse("booking-recurring")

        response = self.client.delete(f"{url}?parentBookingId={self.parent_id}&type=all")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["cancelled"], 6)
        self.assertFalse(
            Booking.objects.exclude(status=BookingStatus.CANCELLED).exists()
        )

    def test_cancel_requires_parent_id(self):
        self.client.force_authenticate(self.owner)

        response = self.client.delete(f"{reverse('booking-recurring')}?type=all")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Parent booking ID required")

    def test_cancel_rejects_unknown_scope(self):
        self.client.force_authenticate(self.owner)
        url = reverse("booking-recurring")

        response = self.client.delete(f"{url}?parentBookingId={self.parent_id}&type=past")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_cancel_requires_auth(self):
        url = reverse("booking-recurring")
        response = self.client.delete(f"{url}?parentBookingId={self.parent_id}&type=all")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(Booking.objects.filter(status=BookingStatus.CANCELLED).count(), 0)


class SingleBookingAPITests(BookingAPITestBase):

    def booking_payload(self, **overrides):
        payload = {
            "customerName": "Amit",
            "customerPhone": "9876543212",
            "startTime": self.start.isoformat(),
            "endTime": (self.start + timedelta(hours=2)).isoformat(),
        }
        payload.update(overrides)
        return payload

    def test_public_create(self):
        response = self.client.post(reverse("booking-list"), self.booking_payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], BookingStatus.CONFIRMED)
        self.assertEqual(response.data["createdBy"]["email"], "owner@turf.test")

    def test_overlapping_create_is_409(self):
        self.client.post(reverse("booking-list"), self.booking_payload(), format="json")

        response = self.client.post(
            reverse("booking-list"),
            self.booking_payload(startTime=(self.start + timedelta(hours=1)).isoformat()),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"], "Time slot is already booked")

    def test_list_filters_by_status_and_range(self):
        self.client.post(reverse("booking-list"), self.booking_payload(), format="json")
        self.client.post(
            reverse("booking-list"),
            self.booking_payload(
                startTime=(self.start + timedelta(days=1)).isoformat(),
                endTime=(self.start + timedelta(days=1, hours=1)).isoformat(),
                status=BookingStatus.PENDING,
            ),
            format="json",
        )

        response = self.client.get(reverse("booking-list"), {"status": BookingStatus.PENDING})
        self.assertEqual(len(response.data), 1)

        response = self.client.get(reverse("booking-list"), {"status": "ALL"})
        self.assertEqual(len(response.data), 2)

        response = self.client.get(
            reverse("booking-list"),
            {
                "startDate": self.start.isoformat(),
                "endDate": (self.start + timedelta(hours=12)).isoformat(),
            },
        )
        self.assertEqual(len(response.data), 1)

    def test_patch_and_delete(self):
        created = self.client.post(
            reverse("booking-list"), self.booking_payload(), format="json"
        ).data
        url = reverse("booking-detail", args=[created["id"]])

        self.assertEqual(self.client.patch(url, {"notes": "x"}, format="json").status_code, 401)

        self.client.force_authenticate(self.owner)

        response = self.client.patch(
            url, {"status": BookingStatus.COMPLETED, "charge": "800.00"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], BookingStatus.COMPLETED)
        self.assertEqual(response.data["charge"], "800.00")

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Booking.objects.filter(id=created["id"]).exists())

    def test_unknown_booking_is_404(self):
        self.client.force_authenticate(self.owner)

        response = self.client.get(reverse("booking-detail", args=[999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIn("error", response.data)

    def test_patch_and_delete_unknown_booking_are_404(self):
        self.client.force_authenticate(self.owner)
        url = reverse("booking-detail", args=[999])

        response = self.client.patch(url, {"notes": "x"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIn("error", response.data)

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_invalid_single_booking_without_owner_is_400(self):
        self.owner.delete()

        response = self.client.post(
            reverse("booking-list"),
            self.booking_payload(endTime=self.start.isoformat()),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "End time must be after start time")


class ValidationOrderAPITests(BookingAPITestBase):

    def test_invalid_series_without_owner_is_400_not_configuration_error(self):
        self.owner.delete()

        with mock.patch("Bookings.views.resolve_booking_owner") as resolve:
            response = self.client.post(
                reverse("booking-recurring"),
                self.recurring_payload(recurringDays=[]),
                format="json",
            )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Select at least one day")
        resolve.assert_not_called()

    def test_out_of_range_charge_is_invalid_charge(self):
        response = self.client.post(
            reverse("booking-recurring"),
            self.recurring_payload(charge="1e15"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["error"], "Charge must be a positive amount up to 50000"
        )
        self.assertFalse(Booking.objects.exists())

    def test_charge_is_rounded_to_cents(self):
        response = self.client.post(
            reverse("booking-recurring"),
            self.recurring_payload(charge="750.505"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(
            set(Booking.objects.values_list("charge", flat=True)), {Decimal("750.50")}
        )

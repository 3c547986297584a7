import json
from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase, override_settings

from Bookings.constants import BookingStatus, CancelScope
from Bookings.exceptions import (
    InvalidCharge,
    InvalidCustomer,
    InvalidInterval,
    InvalidRecurrenceRule,
    NoValidDates,
    ParentNotFound,
    PersistenceFault,
    RecurrenceRangeTooLarge,
    SlotConflict,
    TooManyInstances,
)
from Bookings.models import Booking
from Bookings.repository import BookingRepository
from Bookings.services import (
    BookingTemplate,
    BookingUpdate,
    RecurrenceRule,
    RecurringBookingPlanner,
    cancel_series,
    clean_charge,
    create_booking,
    get_series,
    update_booking,
)
from Bookings.utils import sunday_first_weekday


def utc(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


NOW = utc(2024, 6, 1)


def make_template(**overrides):
    values = {
        "customer_name": "Rahul Sharma",
        "customer_phone": "9876543211",
        "charge": None,
        "notes": "Weekly practice",
    }
    values.update(overrides)
    return BookingTemplate(**values)


def make_rule(**overrides):
    values = {
        "start_time": utc(2024, 6, 3, 9),
        "end_time": utc(2024, 6, 3, 10),
        "recurring_days": [1, 3, 5],
        "recurring_end_date": utc(2024, 6, 14),
    }
    values.update(overrides)
    return RecurrenceRule(**values)


@override_settings(TIME_ZONE="UTC")
class PlanSeriesTests(TestCase):

    def setUp(self):
        self.planner = RecurringBookingPlanner()

    def test_creates_confirmed_series_sharing_parent_id(self):
        result = self.planner.plan_series(make_template(), make_rule(), now=NOW)

        self.assertEqual(result.count, 6)
        self.assertEqual(
            [d.date().isoformat() for d in result.dates],
            ["2024-06-03", "2024-06-05", "2024-06-07", "2024-06-10", "2024-06-12", "2024-06-14"],
        )

        bookings = Booking.objects.filter(parent_booking_id=result.parent_booking_id)
        self.assertEqual(bookings.count(), 6)

        for booking in bookings:
            self.assertEqual(booking.status, BookingStatus.CONFIRMED)
            self.assertTrue(booking.is_recurring)
            self.assertEqual(json.loads(booking.recurring_days), [1, 3, 5])
            self.assertEqual(booking.recurring_end_date, utc(2024, 6, 14))
            self.assertEqual(booking.charge, Decimal("500"))
            self.assertEqual(booking.end_time - booking.start_time, timedelta(hours=1))
            self.assertIn(sunday_first_weekday(booking.start_time.date()), {1, 3, 5})

    def test_trims_customer_fields(self):
        result = self.planner.plan_series(
            make_template(customer_name="  Amit  ", customer_phone=" 9876543212 "),
            make_rule(),
            now=NOW,
        )

        booking = Booking.objects.filter(parent_booking_id=result.parent_booking_id).first()
        self.assertEqual(booking.customer_name, "Amit")
        self.assertEqual(booking.customer_phone, "9876543212")

    def test_custom_charge_is_applied(self):
        result = self.planner.plan_series(
            make_template(charge=Decimal("750")), make_rule(), now=NOW
        )

        charges = set(
            Booking.objects
            .filter(parent_booking_id=result.parent_booking_id)
            .values_list("charge", flat=True)
        )
        self.assertEqual(charges, {Decimal("750")})

    def test_conflict_rejects_whole_series(self):
        Booking.objects.create(
            customer_name="Priya Singh",
            customer_phone="9876543213",
            start_time=utc(2024, 6, 7, 9, 30),
            end_time=utc(2024, 6, 7, 9, 45),
            status=BookingStatus.CONFIRMED,
        )

        with self.assertRaises(SlotConflict) as ctx:
            self.planner.plan_series(make_template(), make_rule(), now=NOW)

        self.assertEqual(ctx.exception.conflicts, 1)
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertEqual(Booking.objects.filter(is_recurring=True).count(), 0)

    def test_conflict_count_reports_every_overlapping_booking(self):
        for day in (3, 10):
            Booking.objects.create(
                customer_name="Existing",
                customer_phone="9876543213",
                start_time=utc(2024, 6, day, 9),
                end_time=utc(2024, 6, day, 10),
                status=BookingStatus.PENDING,
            )

        with self.assertRaises(SlotConflict) as ctx:
            self.planner.plan_series(make_template(), make_rule(), now=NOW)

        self.assertEqual(ctx.exception.conflicts, 2)

    def test_cancelled_bookings_do_not_conflict(self):
        Booking.objects.create(
            customer_name="Priya Singh",
            customer_phone="9876543213",
            start_time=utc(2024, 6, 7, 9, 30),
            end_time=utc(2024, 6, 7, 9, 45),
            status=BookingStatus.CANCELLED,
        )

        result = self.planner.plan_series(make_template(), make_rule(), now=NOW)
        self.assertEqual(result.count, 6)

    def test_adjacent_booking_does_not_conflict(self):
        Booking.objects.create(
            customer_name="Early game",
            customer_phone="9876543213",
            start_time=utc(2024, 6, 5, 8),
            end_time=utc(2024, 6, 5, 9),
            status=BookingStatus.CONFIRMED,
        )

        result = self.planner.plan_series(make_template(), make_rule(), now=NOW)
        self.assertEqual(result.count, 6)

    def test_empty_days_rejected_before_generation(self):
        with mock.patch("Bookings.services.generate_occurrences") as generate:
            with self.assertRaises(InvalidRecurrenceRule):
                self.planner.plan_series(make_template(), make_rule(recurring_days=[]), now=NOW)

        generate.assert_not_called()

    def test_out_of_range_weekday_rejected(self):
        with self.assertRaises(InvalidRecurrenceRule):
            self.planner.plan_series(make_template(), make_rule(recurring_days=[1, 7]), now=NOW)

    def test_end_before_start_is_invalid_interval(self):
        with self.assertRaises(InvalidInterval):
            self.planner.plan_series(
                make_template(),
                make_rule(end_time=utc(2024, 6, 3, 9)),
                now=NOW,
            )

    def test_recurring_end_date_must_follow_start(self):
        with self.assertRaises(InvalidRecurrenceRule):
            self.planner.plan_series(
                make_template(),
                make_rule(recurring_end_date=utc(2024, 6, 3, 9)),
                now=NOW,
            )

    def test_range_beyond_26_weeks_rejected_without_conflict_check(self):
        repository = mock.Mock(spec=BookingRepository)
        planner = RecurringBookingPlanner(repository=repository)

        with self.assertRaises(RecurrenceRangeTooLarge):
            planner.plan_series(
                make_template(),
                make_rule(recurring_end_date=utc(2024, 6, 3, 9) + timedelta(days=183)),
                now=NOW,
            )

        repository.find_overlapping.assert_not_called()
        repository.create_many.assert_not_called()

    def test_exactly_26_weeks_is_allowed(self):
        result = self.planner.plan_series(
            make_template(),
            make_rule(
                recurring_days=[1],
                recurring_end_date=utc(2024, 6, 3, 9) + timedelta(weeks=26),
            ),
            now=NOW,
        )
        self.assertEqual(result.count, 27)

    def test_invalid_charge(self):
        for charge in (Decimal("0"), Decimal("-5"), Decimal("50000.01")):
            with self.subTest(charge=charge):
                with self.assertRaises(InvalidCharge):
                    self.planner.plan_series(make_template(charge=charge), make_rule(), now=NOW)

    def test_blank_customer_rejected(self):
        with self.assertRaises(InvalidCustomer):
            self.planner.plan_series(make_template(customer_name="   "), make_rule(), now=NOW)

        with self.assertRaises(InvalidCustomer):
            self.planner.plan_series(make_template(customer_phone="12345"), make_rule(), now=NOW)

    def test_range_in_past_has_no_valid_dates(self):
        with self.assertRaises(NoValidDates):
            self.planner.plan_series(make_template(), make_rule(), now=utc(2024, 7, 1))

    def test_more_than_100_instances_rejected(self):
        with self.assertRaises(TooManyInstances):
            self.planner.plan_series(
                make_template(),
                make_rule(
                    recurring_days=[0, 1, 2, 3, 4, 5, 6],
                    recurring_end_date=utc(2024, 6, 3, 9) + timedelta(weeks=26),
                ),
                now=NOW,
            )

        self.assertEqual(Booking.objects.count(), 0)

    def test_longer_than_a_day_rejected(self):
        with self.assertRaises(InvalidInterval):
            self.planner.plan_series(
                make_template(),
                make_rule(end_time=utc(2024, 6, 4, 10)),
                now=NOW,
            )

    def test_write_failure_leaves_no_bookings(self):
        repository = BookingRepository()

        with mock.patch.object(repository, "create_many", side_effect=DatabaseError("boom")):
            planner = RecurringBookingPlanner(repository=repository)
            with self.assertRaises(PersistenceFault) as ctx:
                planner.plan_series(make_template(), make_rule(), now=NOW)

        self.assertNotIn("boom", str(ctx.exception.detail))
        self.assertEqual(Booking.objects.count(), 0)

    def test_conflict_check_is_a_single_query(self):
        planner = RecurringBookingPlanner()
        validated_template, validated_rule = planner.validate(make_template(), make_rule())
        occurrences = planner.generate(validated_rule, NOW)

        with self.assertNumQueries(1):
            BookingRepository().find_overlapping(occurrences)


@override_settings(TIME_ZONE="UTC")
class CancelSeriesTests(TestCase):

    def setUp(self):
        result = RecurringBookingPlanner().plan_series(make_template(), make_rule(), now=NOW)
        self.parent_id = result.parent_booking_id

    def statuses(self):
        return list(
            Booking.objects
            .filter(parent_booking_id=self.parent_id)
            .order_by("start_time")
            .values_list("status", flat=True)
        )

    def test_cancel_all_is_idempotent(self):
        first = cancel_series(self.parent_id, CancelScope.ALL, now=NOW)
        second = cancel_series(self.parent_id, CancelScope.ALL, now=NOW)

        self.assertEqual(first, 6)
        self.assertEqual(second, 0)
        self.assertEqual(set(self.statuses()), {BookingStatus.CANCELLED})
        # Rows are kept, only their status changes
        self.assertEqual(Booking.objects.filter(parent_booking_id=self.parent_id).count(), 6)

    def test_cancel_future_only_touches_later_bookings(self):
        count = cancel_series(self.parent_id, CancelScope.FUTURE, now=utc(2024, 6, 8))

        self.assertEqual(count, 3)
        self.assertEqual(
            self.statuses(),
            [BookingStatus.CONFIRMED] * 3 + [BookingStatus.CANCELLED] * 3,
        )

    def test_future_includes_booking_starting_now(self):
        count = cancel_series(self.parent_id, CancelScope.FUTURE, now=utc(2024, 6, 14, 9))
        self.assertEqual(count, 1)

    def test_default_scope_is_future(self):
        count = cancel_series(self.parent_id, now=utc(2024, 6, 11))
        self.assertEqual(count, 2)

    def test_unknown_parent_returns_zero(self):
        self.assertEqual(cancel_series("recurring-unknown", CancelScope.ALL, now=NOW), 0)

    def test_empty_parent_id_rejected(self):
        with self.assertRaises(ParentNotFound):
            cancel_series("", CancelScope.ALL, now=NOW)

    def test_unknown_scope_rejected(self):
        with self.assertRaises(InvalidRecurrenceRule):
            cancel_series(self.parent_id, "past", now=NOW)

    def test_get_series_orders_by_start(self):
        bookings = get_series(self.parent_id)

        self.assertEqual(len(bookings), 6)
        starts = [b.start_time for b in bookings]
        self.assertEqual(starts, sorted(starts))


@override_settings(TIME_ZONE="UTC")
class SingleBookingTests(TestCase):

    def setUp(self):
        self.booking = create_booking({
            "customer_name": "Rahul",
            "customer_phone": "9876543211",
            "start_time": utc(2024, 6, 3, 10),
            "end_time": utc(2024, 6, 3, 11),
            "status": BookingStatus.CONFIRMED,
        })

    def test_defaults(self):
        self.assertEqual(self.booking.charge, Decimal("500"))
        self.assertEqual(self.booking.status, BookingStatus.CONFIRMED)
        self.assertFalse(self.booking.is_recurring)

    def test_adjacent_booking_allowed(self):
        booking = create_booking({
            "customer_name": "Amit",
            "customer_phone": "9876543212",
            "start_time": utc(2024, 6, 3, 11),
            "end_time": utc(2024, 6, 3, 12),
        })
        self.assertIsNotNone(booking.pk)

    def test_overlapping_booking_rejected(self):
        with self.assertRaises(SlotConflict):
            create_booking({
                "customer_name": "Amit",
                "customer_phone": "9876543212",
                "start_time": utc(2024, 6, 3, 10, 59),
                "end_time": utc(2024, 6, 3, 12),
            })

    def test_update_does_not_conflict_with_itself(self):
        booking = update_booking(
            self.booking,
            BookingUpdate(end_time=utc(2024, 6, 3, 11, 30), notes="Extended"),
        )

        self.assertEqual(booking.end_time, utc(2024, 6, 3, 11, 30))
        self.assertEqual(booking.notes, "Extended")

    def test_update_into_other_booking_rejected(self):
        other = create_booking({
            "customer_name": "Amit",
            "customer_phone": "9876543212",
            "start_time": utc(2024, 6, 3, 12),
            "end_time": utc(2024, 6, 3, 13),
        })

        with self.assertRaises(SlotConflict):
            update_booking(other, BookingUpdate(start_time=utc(2024, 6, 3, 10, 30)))

    def test_update_to_inverted_interval_rejected(self):
        with self.assertRaises(InvalidInterval):
            update_booking(self.booking, BookingUpdate(end_time=utc(2024, 6, 3, 9)))

    def test_cancelling_skips_overlap_check(self):
        other = Booking.objects.create(
            customer_name="Overlap",
            customer_phone="9876543213",
            start_time=utc(2024, 6, 3, 10),
            end_time=utc(2024, 6, 3, 11),
            status=BookingStatus.CANCELLED,
        )

        booking = update_booking(other, BookingUpdate(notes="still cancelled"))
        self.assertEqual(booking.status, BookingStatus.CANCELLED)


@override_settings(TIME_ZONE="UTC")
class OwnerResolutionTests(TestCase):

    def test_owner_resolved_only_after_validation(self):
        resolve_owner = mock.Mock()

        with self.assertRaises(InvalidRecurrenceRule):
            RecurringBookingPlanner().plan_series(
                make_template(),
                make_rule(recurring_days=[]),
                now=NOW,
                resolve_owner=resolve_owner,
            )
        with self.assertRaises(NoValidDates):
            RecurringBookingPlanner().plan_series(
                make_template(), make_rule(), now=utc(2024, 7, 1), resolve_owner=resolve_owner
            )

        resolve_owner.assert_not_called()

    def test_single_booking_owner_resolved_only_after_validation(self):
        resolve_owner = mock.Mock()

        with self.assertRaises(InvalidCharge):
            create_booking(
                {
                    "customer_name": "Rahul",
                    "customer_phone": "9876543211",
                    "start_time": utc(2024, 6, 3, 10),
                    "end_time": utc(2024, 6, 3, 11),
                    "charge": Decimal("1e15"),
                },
                resolve_owner=resolve_owner,
            )

        resolve_owner.assert_not_called()

    def test_clean_charge_rounds_to_cents(self):
        self.assertEqual(clean_charge(Decimal("99.999")), Decimal("100.00"))
        with self.assertRaises(InvalidCharge):
            clean_charge(Decimal("1e15"))

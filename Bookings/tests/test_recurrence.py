from datetime import date, datetime, timedelta, timezone as dt_timezone

from django.test import SimpleTestCase, override_settings

from Bookings.recurrence import generate_occurrences
from Bookings.utils import generate_parent_booking_id, overlaps, sunday_first_weekday


def utc(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


class OverlapTests(SimpleTestCase):

    def test_touching_intervals_do_not_conflict(self):
        self.assertFalse(overlaps(
            utc(2024, 6, 3, 10), utc(2024, 6, 3, 11),
            utc(2024, 6, 3, 11), utc(2024, 6, 3, 12),
        ))

    def test_one_minute_overlap_conflicts(self):
        self.assertTrue(overlaps(
            utc(2024, 6, 3, 10), utc(2024, 6, 3, 11, 1),
            utc(2024, 6, 3, 11), utc(2024, 6, 3, 12),
        ))

    def test_contained_interval_conflicts(self):
        self.assertTrue(overlaps(
            utc(2024, 6, 7, 9), utc(2024, 6, 7, 10),
            utc(2024, 6, 7, 9, 30), utc(2024, 6, 7, 9, 45),
        ))


class WeekdayTests(SimpleTestCase):

    def test_sunday_is_zero(self):
        self.assertEqual(sunday_first_weekday(date(2024, 6, 2)), 0)

    def test_monday_is_one_and_saturday_is_six(self):
        self.assertEqual(sunday_first_weekday(date(2024, 6, 3)), 1)
        self.assertEqual(sunday_first_weekday(date(2024, 6, 8)), 6)


class ParentIdTests(SimpleTestCase):

    def test_ids_are_prefixed_and_distinct(self):
        ids = {generate_parent_booking_id() for _ in range(50)}
        self.assertEqual(len(ids), 50)
        self.assertTrue(all(i.startswith("recurring-") for i in ids))


@override_settings(TIME_ZONE="UTC")
class GenerateOccurrencesTests(SimpleTestCase):

    def setUp(self):
        self.start = utc(2024, 6, 3, 9)
        self.end = utc(2024, 6, 3, 10)
        self.until = utc(2024, 6, 14)

    def test_mon_wed_fri_over_two_weeks(self):
        occurrences = generate_occurrences(
            self.start, self.end, [1, 3, 5], self.until, now=utc(2024, 6, 1)
        )

        self.assertEqual(
            [start.date() for start, _ in occurrences],
            [
                date(2024, 6, 3),
                date(2024, 6, 5),
                date(2024, 6, 7),
                date(2024, 6, 10),
                date(2024, 6, 12),
                date(2024, 6, 14),
            ],
        )
        for start, end in occurrences:
            self.assertEqual((start.hour, start.minute), (9, 0))
            self.assertEqual(end - start, timedelta(hours=1))

    def test_every_occurrence_is_on_a_selected_weekday(self):
        occurrences = generate_occurrences(
            self.start, self.end, [0, 6], utc(2024, 8, 1), now=utc(2024, 6, 1)
        )

        self.assertTrue(occurrences)
        for start, _ in occurrences:
            self.assertIn(sunday_first_weekday(start.date()), {0, 6})

    def test_past_occurrences_are_dropped(self):
        now = utc(2024, 6, 7, 9)
        occurrences = generate_occurrences(self.start, self.end, [1, 3, 5], self.until, now)

        # Friday 09:00 equals now and is not strictly in the future
        self.assertEqual(
            [start.date() for start, _ in occurrences],
            [date(2024, 6, 10), date(2024, 6, 12), date(2024, 6, 14)],
        )
        self.assertTrue(all(start > now for start, _ in occurrences))

    def test_range_entirely_in_past_yields_nothing(self):
        occurrences = generate_occurrences(
            self.start, self.end, [1, 3, 5], self.until, now=utc(2024, 7, 1)
        )
        self.assertEqual(occurrences, [])

    def test_start_minute_is_preserved(self):
        occurrences = generate_occurrences(
            utc(2024, 6, 3, 18, 30),
            utc(2024, 6, 3, 20),
            [2],
            utc(2024, 6, 20),
            now=utc(2024, 6, 1),
        )

        self.assertEqual(
            [(s.date(), s.hour, s.minute) for s, _ in occurrences],
            [(date(2024, 6, 4), 18, 30), (date(2024, 6, 11), 18, 30), (date(2024, 6, 18), 18, 30)],
        )
        self.assertTrue(all(e - s == timedelta(minutes=90) for s, e in occurrences))


@override_settings(TIME_ZONE="Asia/Kolkata")
class LocalWallClockTests(SimpleTestCase):

    def test_wall_clock_time_follows_local_zone(self):
        # 03:30 UTC is 09:00 in Kolkata
        occurrences = generate_occurrences(
            utc(2024, 6, 3, 3, 30),
            utc(2024, 6, 3, 4, 30),
            [1],
            utc(2024, 6, 11),
            now=utc(2024, 6, 1),
        )

        self.assertEqual(len(occurrences), 2)
        for start, _ in occurrences:
            self.assertEqual(start.astimezone(dt_timezone.utc).time().isoformat(), "03:30:00")

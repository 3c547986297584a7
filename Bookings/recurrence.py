from datetime import datetime, time, timedelta

from django.utils import timezone

from .utils import ensure_aware, sunday_first_weekday


def generate_occurrences(start_time, end_time, recurring_days, recurring_end_date, now):
    """
    Expand a recurrence into concrete (start, end) pairs.

    Walks every calendar day from the first occurrence's day through the
    end date's day (inclusive, local time zone). Matching weekdays get a
    candidate at the first occurrence's wall-clock hour and minute, lasting
    as long as the first occurrence. Candidates not strictly after `now`
    are dropped.
    """
    start_time = ensure_aware(start_time)
    end_time = ensure_aware(end_time)
    recurring_end_date = ensure_aware(recurring_end_date)
    now = ensure_aware(now)

    duration = end_time - start_time
    local_start = timezone.localtime(start_time)
    wall_clock = time(local_start.hour, local_start.minute)

    current = local_start.date()
    last_day = timezone.localtime(recurring_end_date).date()
    days = set(recurring_days)

    occurrences = []
    while current <= last_day:
        if sunday_first_weekday(current) in days:
            start = timezone.make_aware(datetime.combine(current, wall_clock))
            if start > now:
                occurrences.append((start, start + duration))
        current += timedelta(days=1)

    for (_, previous_end), (next_start, _) in zip(occurrences, occurrences[1:]):
        assert previous_end <= next_start, "recurring occurrences overlap each other"

    return occurrences

# bookings/utils.py
import string
import time

from django.utils import timezone
from django.utils.crypto import get_random_string

from .constants import PARENT_ID_PREFIX


def overlaps(a_start, a_end, b_start, b_end):
    # Half-open intervals: touching ends do not conflict
    return a_start < b_end and a_end > b_start


def ensure_aware(value):
    if value is not None and timezone.is_naive(value):
        return timezone.make_aware(value)
    return value


def sunday_first_weekday(day):
    """Weekday index with Sunday=0 .. Saturday=6."""
    return (day.weekday() + 1) % 7


def generate_parent_booking_id():
    suffix = get_random_string(9, allowed_chars=string.ascii_lowercase + string.digits)
    return f"{PARENT_ID_PREFIX}-{int(time.time() * 1000)}-{suffix}"

# bookings/constants.py
from decimal import Decimal


class BookingStatus:
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"

    CHOICES = (
        (PENDING, "Pending"),
        (CONFIRMED, "Confirmed"),
        (CANCELLED, "Cancelled"),
        (COMPLETED, "Completed"),
    )


class CancelScope:
    ALL = "all"
    FUTURE = "future"

    CHOICES = (ALL, FUTURE)


DEFAULT_CHARGE = Decimal("500")
MAX_CHARGE = Decimal("50000")

# Recurring series limits
MAX_RECURRING_WEEKS = 26
MAX_SERIES_INSTANCES = 100

PARENT_ID_PREFIX = "recurring"

CUSTOMER_NAME_MAX_LENGTH = 100
CUSTOMER_PHONE_MIN_LENGTH = 10
CUSTOMER_PHONE_MAX_LENGTH = 15
NOTES_MAX_LENGTH = 1000

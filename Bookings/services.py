import json
import logging
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from django.db import DatabaseError, transaction
from django.utils import timezone

from .constants import (
    CUSTOMER_NAME_MAX_LENGTH,
    CUSTOMER_PHONE_MAX_LENGTH,
    CUSTOMER_PHONE_MIN_LENGTH,
    DEFAULT_CHARGE,
    MAX_CHARGE,
    MAX_RECURRING_WEEKS,
    MAX_SERIES_INSTANCES,
    NOTES_MAX_LENGTH,
    BookingStatus,
    CancelScope,
)
from .exceptions import (
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
from .models import Booking
from .recurrence import generate_occurrences
from .repository import BookingRepository
from .utils import ensure_aware, generate_parent_booking_id

logger = logging.getLogger(__name__)


# =========================================================
# INPUT / OUTPUT STRUCTURES
# =========================================================

@dataclass
class BookingTemplate:
    customer_name: str
    customer_phone: str
    charge: Optional[Decimal] = None
    notes: str = ""


@dataclass
class RecurrenceRule:
    start_time: object
    end_time: object
    recurring_days: List[int]
    recurring_end_date: object


@dataclass
class PlanResult:
    count: int
    parent_booking_id: str
    dates: list = field(default_factory=list)


@dataclass
class BookingUpdate:
    """Explicit set of fields a booking PATCH may change."""
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    start_time: Optional[object] = None
    end_time: Optional[object] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    charge: Optional[Decimal] = None

    def changed_fields(self):
        return {
            name: value
            for name, value in self.__dict__.items()
            if value is not None
        }


# =========================================================
# SHARED VALIDATION
# =========================================================

def clean_customer(name, phone, min_phone_length=CUSTOMER_PHONE_MIN_LENGTH):
    name = (name or "").strip()
    phone = (phone or "").strip()

    if not name:
        raise InvalidCustomer("Customer name is required")
    if len(name) > CUSTOMER_NAME_MAX_LENGTH:
        raise InvalidCustomer("Customer name is too long")

    if not phone:
        raise InvalidCustomer("Customer phone is required")
    if len(phone) < min_phone_length or len(phone) > CUSTOMER_PHONE_MAX_LENGTH:
        raise InvalidCustomer("Valid phone number required")

    return name, phone


def clean_charge(charge):
    if charge is None:
        return DEFAULT_CHARGE

    try:
        value = Decimal(str(charge))
    except (InvalidOperation, ValueError):
        raise InvalidCharge()

    if not value.is_finite() or value <= 0 or value > MAX_CHARGE:
        raise InvalidCharge()

    return value.quantize(Decimal("0.01"))


def clean_notes(notes):
    notes = (notes or "").strip()
    if len(notes) > NOTES_MAX_LENGTH:
        raise InvalidCustomer("Notes must be at most 1000 characters")
    return notes


def clean_interval(start_time, end_time):
    start_time = ensure_aware(start_time)
    end_time = ensure_aware(end_time)

    if start_time is None or end_time is None or end_time <= start_time:
        raise InvalidInterval()

    return start_time, end_time


def clean_recurring_days(days):
    if not days:
        raise InvalidRecurrenceRule("Select at least one day")

    cleaned = set()
    for day in days:
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
            raise InvalidRecurrenceRule("Recurring days must be integers from 0 (Sunday) to 6 (Saturday)")
        cleaned.add(day)

    return sorted(cleaned)


# =========================================================
# RECURRING SERIES
# =========================================================

class RecurringBookingPlanner:
    """
    Turns a recurrence request into a validated, conflict-free,
    persisted set of bookings sharing one parent_booking_id.

    Validation runs before any query. The conflict check and the bulk
    insert share one transaction; overlapping rows are locked with
    SELECT ... FOR UPDATE on backends that support it.
    """

    def __init__(self, repository=None):
        self.repository = repository or BookingRepository()

    def validate(self, template, rule):
        name, phone = clean_customer(template.customer_name, template.customer_phone)
        start_time, end_time = clean_interval(rule.start_time, rule.end_time)

        # Longer occurrences would collide with the next day's copy
        if end_time - start_time > timedelta(days=1):
            raise InvalidInterval("Recurring bookings cannot last longer than 24 hours")

        days = clean_recurring_days(rule.recurring_days)

        end_date = ensure_aware(rule.recurring_end_date)
        if end_date is None or end_date <= start_time:
            raise InvalidRecurrenceRule("Recurring end date must be after start time")

        if end_date > start_time + timedelta(weeks=MAX_RECURRING_WEEKS):
            raise RecurrenceRangeTooLarge()

        charge = clean_charge(template.charge)
        notes = clean_notes(template.notes)

        return (
            BookingTemplate(name, phone, charge, notes),
            RecurrenceRule(start_time, end_time, days, end_date),
        )

    def generate(self, rule, now):
        occurrences = generate_occurrences(
            rule.start_time,
            rule.end_time,
            rule.recurring_days,
            rule.recurring_end_date,
            now,
        )

        if not occurrences:
            raise NoValidDates()

        if len(occurrences) > MAX_SERIES_INSTANCES:
            raise TooManyInstances()

        return occurrences

    def build_instances(self, template, rule, occurrences, parent_id, created_by=None):
        recurring_days = json.dumps(rule.recurring_days)

        return [
            Booking(
                customer_name=template.customer_name,
                customer_phone=template.customer_phone,
                start_time=start,
                end_time=end,
                charge=template.charge,
                notes=template.notes,
                is_recurring=True,
                recurring_days=recurring_days,
                recurring_end_date=rule.recurring_end_date,
                parent_booking_id=parent_id,
                created_by=created_by,
                status=BookingStatus.CONFIRMED,
            )
            for start, end in occurrences
        ]

    def plan_series(self, template, rule, now=None, created_by=None, resolve_owner=None):
        """
        `resolve_owner` is called only once the request has passed
        validation and date generation; its result becomes `created_by`.
        """
        now = ensure_aware(now) or timezone.now()

        template, rule = self.validate(template, rule)
        occurrences = self.generate(rule, now)

        if resolve_owner is not None:
            created_by = resolve_owner()

        parent_id = generate_parent_booking_id()
        instances = self.build_instances(
            template, rule, occurrences, parent_id, created_by
        )

        try:
            with transaction.atomic():
                conflicts = self.repository.find_overlapping(occurrences, lock=True)

                if conflicts:
                    logger.info(
                        "Recurring request rejected: %s conflicting booking(s)",
                        len(conflicts),
                    )
                    raise SlotConflict(
                        conflicts=len(conflicts),
                        detail=(
                            f"Found {len(conflicts)} time slot conflict(s). "
                            "Please check existing bookings."
                        ),
                    )

                self.repository.create_many(instances)
        except DatabaseError as exc:
            logger.exception("Failed to create recurring series %s", parent_id)
            raise PersistenceFault("Failed to create recurring bookings") from exc

        logger.info(
            "Created recurring series %s with %s booking(s)", parent_id, len(instances)
        )

        return PlanResult(
            count=len(instances),
            parent_booking_id=parent_id,
            dates=[start for start, _ in occurrences],
        )


def cancel_series(parent_id, scope=CancelScope.FUTURE, now=None, repository=None):
    """
    Mark every booking of a series as cancelled. With scope "future"
    only bookings starting at or after `now` are touched.
    Returns the number of bookings that changed.
    """
    parent_id = (parent_id or "").strip()
    if not parent_id:
        raise ParentNotFound()

    scope = scope or CancelScope.FUTURE
    if scope not in CancelScope.CHOICES:
        raise InvalidRecurrenceRule("Cancellation type must be 'all' or 'future'")

    repository = repository or BookingRepository()
    min_start_time = None
    if scope == CancelScope.FUTURE:
        min_start_time = ensure_aware(now) or timezone.now()

    try:
        count = repository.update_many_status(
            parent_id, BookingStatus.CANCELLED, min_start_time=min_start_time
        )
    except DatabaseError as exc:
        logger.exception("Failed to cancel recurring series %s", parent_id)
        raise PersistenceFault("Failed to cancel recurring bookings") from exc

    logger.info("Cancelled %s booking(s) of series %s (scope=%s)", count, parent_id, scope)
    return count


def get_series(parent_id, repository=None):
    parent_id = (parent_id or "").strip()
    if not parent_id:
        raise ParentNotFound()

    repository = repository or BookingRepository()
    return repository.list_series(parent_id)


# =========================================================
# SINGLE BOOKINGS
# =========================================================

def ensure_slot_free(start_time, end_time, exclude_pk=None, repository=None):
    repository = repository or BookingRepository()

    conflicts = repository.find_overlapping(
        [(start_time, end_time)], exclude_pk=exclude_pk, lock=True
    )
    if conflicts:
        raise SlotConflict(conflicts=len(conflicts))


def create_booking(data, created_by=None, repository=None, resolve_owner=None):
    name, phone = clean_customer(
        data.get("customer_name"), data.get("customer_phone"), min_phone_length=1
    )
    start_time, end_time = clean_interval(data.get("start_time"), data.get("end_time"))
    charge = clean_charge(data.get("charge"))
    status = data.get("status") or BookingStatus.CONFIRMED
    notes = clean_notes(data.get("notes"))

    if resolve_owner is not None:
        created_by = resolve_owner()

    with transaction.atomic():
        if status != BookingStatus.CANCELLED:
            ensure_slot_free(start_time, end_time, repository=repository)

        booking = Booking.objects.create(
            customer_name=name,
            customer_phone=phone,
            start_time=start_time,
            end_time=end_time,
            status=status,
            charge=charge,
            notes=notes,
            created_by=created_by,
        )

    logger.info("Created booking %s for %s", booking.pk, start_time.isoformat())
    return booking


def update_booking(booking, changes, repository=None):
    """
    Apply a BookingUpdate to an existing booking. The overlap check skips
    the booking itself and is not needed when the result is cancelled.
    """
    values = changes.changed_fields()

    if "customer_name" in values or "customer_phone" in values:
        values["customer_name"], values["customer_phone"] = clean_customer(
            values.get("customer_name", booking.customer_name),
            values.get("customer_phone", booking.customer_phone),
            min_phone_length=1,
        )

    start_time, end_time = clean_interval(
        values.get("start_time", booking.start_time),
        values.get("end_time", booking.end_time),
    )
    values["start_time"], values["end_time"] = start_time, end_time

    if "charge" in values:
        values["charge"] = clean_charge(values["charge"])

    if "notes" in values:
        values["notes"] = clean_notes(values["notes"])

    status = values.get("status", booking.status)

    with transaction.atomic():
        if status != BookingStatus.CANCELLED:
            ensure_slot_free(
                start_time, end_time, exclude_pk=booking.pk, repository=repository
            )

        for attr, value in values.items():
            setattr(booking, attr, value)
        booking.save()

    return booking

from rest_framework import status
from rest_framework.exceptions import APIException


# -------------------------------------------------------------------
# VALIDATION (caller-correctable, never retried)
# -------------------------------------------------------------------
class BookingValidationError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid booking request"
    default_code = "invalid_booking"


class InvalidInterval(BookingValidationError):
    default_detail = "End time must be after start time"
    default_code = "invalid_interval"


class InvalidRecurrenceRule(BookingValidationError):
    default_detail = "Invalid recurrence rule"
    default_code = "invalid_recurrence_rule"


class RecurrenceRangeTooLarge(BookingValidationError):
    default_detail = "Recurring bookings limited to 6 months"
    default_code = "recurrence_range_too_large"


class InvalidCharge(BookingValidationError):
    default_detail = "Charge must be a positive amount up to 50000"
    default_code = "invalid_charge"


class NoValidDates(BookingValidationError):
    default_detail = "No valid future dates found for selected days"
    default_code = "no_valid_dates"


class TooManyInstances(BookingValidationError):
    default_detail = "Too many bookings. Maximum 100 bookings per request"
    default_code = "too_many_instances"


class InvalidCustomer(BookingValidationError):
    default_detail = "Customer name and phone are required"
    default_code = "invalid_customer"


class ParentNotFound(BookingValidationError):
    default_detail = "Parent booking ID required"
    default_code = "parent_not_found"


# -------------------------------------------------------------------
# CONFLICT (informational, caller may adjust and retry)
# -------------------------------------------------------------------
class SlotConflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Time slot is already booked"
    default_code = "slot_conflict"

    def __init__(self, conflicts=1, detail=None):
        self.conflicts = conflicts
        self.extra = {"conflicts": conflicts}
        super().__init__(detail=detail)


# -------------------------------------------------------------------
# SERVER FAULTS
# -------------------------------------------------------------------
class PersistenceFault(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to save bookings"
    default_code = "persistence_fault"

import json

from rest_framework import serializers

from .constants import CancelScope, BookingStatus
from .models import Booking
from .services import BookingTemplate, BookingUpdate, RecurrenceRule


# =========================================================
# BOOKING (READ)
# =========================================================
class BookingSerializer(serializers.ModelSerializer):
    customerName = serializers.CharField(source="customer_name")
    customerPhone = serializers.CharField(source="customer_phone")
    startTime = serializers.DateTimeField(source="start_time")
    endTime = serializers.DateTimeField(source="end_time")
    isRecurring = serializers.BooleanField(source="is_recurring")
    recurringDays = serializers.SerializerMethodField()
    recurringEndDate = serializers.DateTimeField(source="recurring_end_date")
    parentBookingId = serializers.CharField(source="parent_booking_id")
    createdBy = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at")

    class Meta:
        model = Booking
        fields = [
            "id",
            "customerName",
            "customerPhone",
            "startTime",
            "endTime",
            "status",
            "charge",
            "notes",
            "isRecurring",
            "recurringDays",
            "recurringEndDate",
            "parentBookingId",
            "createdBy",
            "createdAt",
        ]

    def get_recurringDays(self, obj):
        if not obj.recurring_days:
            return []
        return json.loads(obj.recurring_days)

    def get_createdBy(self, obj):
        user = obj.created_by
        if user is None:
            return None
        return {"name": user.name, "email": user.email}


# =========================================================
# BOOKING LIST FILTERS
# =========================================================
class BookingListQuerySerializer(serializers.Serializer):
    startDate = serializers.DateTimeField(required=False)
    endDate = serializers.DateTimeField(required=False)
    status = serializers.ChoiceField(
        choices=[choice for choice, _ in BookingStatus.CHOICES] + ["ALL"],
        required=False
    )


# =========================================================
# BOOKING CREATE / UPDATE
# Shape only; business rules live in services
# =========================================================
class BookingWriteSerializer(serializers.Serializer):
    customerName = serializers.CharField(allow_blank=True)
    customerPhone = serializers.CharField(allow_blank=True)
    startTime = serializers.DateTimeField()
    endTime = serializers.DateTimeField()
    status = serializers.ChoiceField(
        choices=BookingStatus.CHOICES,
        default=BookingStatus.CONFIRMED
    )
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    # Range and precision are checked by clean_charge
    charge = serializers.DecimalField(
        max_digits=None,
        decimal_places=None,
        required=False,
        allow_null=True
    )

    def to_booking_data(self):
        data = self.validated_data
        return {
            "customer_name": data["customerName"],
            "customer_phone": data["customerPhone"],
            "start_time": data["startTime"],
            "end_time": data["endTime"],
            "status": data["status"],
            "notes": data.get("notes", ""),
            "charge": data.get("charge"),
        }


class BookingUpdateSerializer(serializers.Serializer):
    customerName = serializers.CharField(required=False, allow_blank=True)
    customerPhone = serializers.CharField(required=False, allow_blank=True)
    startTime = serializers.DateTimeField(required=False)
    endTime = serializers.DateTimeField(required=False)
    status = serializers.ChoiceField(choices=BookingStatus.CHOICES, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    charge = serializers.DecimalField(max_digits=None, decimal_places=None, required=False)

    def to_update(self):
        data = self.validated_data
        return BookingUpdate(
            customer_name=data.get("customerName"),
            customer_phone=data.get("customerPhone"),
            start_time=data.get("startTime"),
            end_time=data.get("endTime"),
            status=data.get("status"),
            notes=data.get("notes"),
            charge=data.get("charge"),
        )


# =========================================================
# RECURRING SERIES
# =========================================================
class RecurringBookingSerializer(serializers.Serializer):
    customerName = serializers.CharField(allow_blank=True)
    customerPhone = serializers.CharField(allow_blank=True)
    startTime = serializers.DateTimeField()
    endTime = serializers.DateTimeField()
    recurringDays = serializers.ListField(
        child=serializers.IntegerField(),
        allow_empty=True
    )
    recurringEndDate = serializers.DateTimeField()
    # Range and precision are checked by clean_charge
    charge = serializers.DecimalField(
        max_digits=None,
        decimal_places=None,
        required=False,
        allow_null=True
    )
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def to_template(self):
        data = self.validated_data
        return BookingTemplate(
            customer_name=data["customerName"],
            customer_phone=data["customerPhone"],
            charge=data.get("charge"),
            notes=data.get("notes", ""),
        )

    def to_rule(self):
        data = self.validated_data
        return RecurrenceRule(
            start_time=data["startTime"],
            end_time=data["endTime"],
            recurring_days=data["recurringDays"],
            recurring_end_date=data["recurringEndDate"],
        )


class SeriesCancelQuerySerializer(serializers.Serializer):
    parentBookingId = serializers.CharField(required=False, allow_blank=True, default="")
    type = serializers.ChoiceField(
        choices=CancelScope.CHOICES,
        default=CancelScope.FUTURE
    )

from datetime import timedelta

from django.utils import timezone
from rest_framework import serializers

from .constants import (
    DEFAULT_PAGE_SIZE,
    DESCRIPTION_MAX_LENGTH,
    MAX_EXPENSE_AMOUNT,
    MAX_PAGE_SIZE,
    TITLE_MAX_LENGTH,
    ExpenseCategory,
)
from .models import Expense


# =========================================================
# EXPENSE SERIALIZER
# Handles create / update validation of expenses
# =========================================================
class ExpenseSerializer(serializers.ModelSerializer):
    title = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=TITLE_MAX_LENGTH
    )
    description = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=DESCRIPTION_MAX_LENGTH
    )
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    category = serializers.ChoiceField(choices=ExpenseCategory.CHOICES)
    date = serializers.DateTimeField(required=False)
    createdBy = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Expense
        fields = [
            "id",
            "title",
            "description",
            "amount",
            "category",
            "date",
            "createdBy",
            "createdAt",
        ]

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Valid positive amount is required")
        if value > MAX_EXPENSE_AMOUNT:
            raise serializers.ValidationError("Amount exceeds maximum limit")
        return value

    def validate_date(self, value):
        # Allow one day of slack for time zone differences
        if value > timezone.now() + timedelta(days=1):
            raise serializers.ValidationError("Date cannot be in the future")
        return value

    def validate(self, data):
        title = data.get("title", getattr(self.instance, "title", None))
        description = data.get("description", getattr(self.instance, "description", None))

        title = (title or "").strip()
        description = (description or "").strip()

        if not title and not description:
            raise serializers.ValidationError("Title or description is required")

        if "title" in data:
            data["title"] = title or None
        if "description" in data:
            data["description"] = description or None

        return data

    def get_createdBy(self, obj):
        user = obj.created_by
        if user is None:
            return None
        return {"name": user.name, "email": user.email}


# =========================================================
# EXPENSE LIST QUERY
# =========================================================
class ExpenseListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, default=1)
    limit = serializers.IntegerField(required=False, default=DEFAULT_PAGE_SIZE)
    category = serializers.CharField(required=False, allow_blank=True)

    def validate_page(self, value):
        return max(1, value)

    def validate_limit(self, value):
        return min(MAX_PAGE_SIZE, max(1, value))

    def validate_category(self, value):
        # Unknown categories are ignored rather than rejected
        if value not in dict(ExpenseCategory.CHOICES):
            return None
        return value

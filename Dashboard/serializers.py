# dashboard/serializers.py
from rest_framework import serializers


class AdminProfileSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    email = serializers.EmailField()
    role = serializers.CharField()


class FinancialSummarySerializer(serializers.Serializer):
    booking_revenue = serializers.FloatField()
    total_expenses = serializers.FloatField()
    net_profit = serializers.FloatField()
    expenses_by_category = serializers.DictField(child=serializers.FloatField())


class WeeklyStatSerializer(serializers.Serializer):
    day = serializers.CharField()
    date = serializers.DateField()
    count = serializers.IntegerField()
    revenue = serializers.FloatField()


class SlotPopularitySerializer(serializers.Serializer):
    time = serializers.CharField()
    count = serializers.IntegerField()
    percentage = serializers.FloatField()


class StatusBreakdownSerializer(serializers.Serializer):
    status = serializers.CharField()
    count = serializers.IntegerField()
    percentage = serializers.FloatField()


class TopCustomerSerializer(serializers.Serializer):
    name = serializers.CharField()
    phone = serializers.CharField()
    count = serializers.IntegerField()


class MonthlyRevenueSerializer(serializers.Serializer):
    month = serializers.CharField()
    total = serializers.FloatField()


class AnalyticsModuleSerializer(serializers.Serializer):
    summary = FinancialSummarySerializer()
    weekly_stats = WeeklyStatSerializer(many=True)
    time_slot_popularity = SlotPopularitySerializer(many=True)
    status_breakdown = StatusBreakdownSerializer(many=True)
    top_customers = TopCustomerSerializer(many=True)
    monthly_revenue = MonthlyRevenueSerializer(many=True)


class DashboardSerializer(serializers.Serializer):
    profile = AdminProfileSerializer()
    analytics = AnalyticsModuleSerializer()

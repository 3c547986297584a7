# slots/serializers.py
from django.utils import timezone
from rest_framework import serializers


class SlotQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)

    def validate(self, data):
        data.setdefault("date", timezone.localdate())
        return data

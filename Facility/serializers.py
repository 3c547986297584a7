from rest_framework import serializers

from .models import FacilitySettings


class FacilitySettingsSerializer(serializers.ModelSerializer):
    defaultPrice = serializers.DecimalField(
        source="default_price",
        max_digits=10,
        decimal_places=2,
        min_value=1,
        required=False
    )
    turfName = serializers.CharField(source="turf_name", max_length=100, required=False)
    turfAddress = serializers.CharField(
        source="turf_address", max_length=255, required=False, allow_blank=True
    )
    turfNotes = serializers.CharField(source="turf_notes", required=False, allow_blank=True)
    turfPhone = serializers.CharField(
        source="turf_phone", max_length=20, required=False, allow_blank=True
    )

    class Meta:
        model = FacilitySettings
        fields = (
            "defaultPrice",
            "turfName",
            "turfAddress",
            "turfNotes",
            "turfPhone",
        )


class TurfInfoSerializer(FacilitySettingsSerializer):
    """Turf details only; the default price is edited separately."""

    class Meta(FacilitySettingsSerializer.Meta):
        fields = (
            "turfName",
            "turfAddress",
            "turfNotes",
            "turfPhone",
        )


class SportNameSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=50)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Sport name is required")
        return value

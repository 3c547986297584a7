from django.db import models

from .constants import DEFAULT_PRICE, DEFAULT_TURF_NAME, SETTINGS_ROW_ID


# =========================
# FACILITY SETTINGS (SINGLETON)
# =========================

class FacilitySettings(models.Model):
    """
    Single row (id=1) holding turf details and the default booking price.
    """

    default_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=DEFAULT_PRICE
    )

    turf_name = models.CharField(max_length=100, default=DEFAULT_TURF_NAME)
    turf_address = models.CharField(max_length=255, blank=True, default="")
    turf_notes = models.TextField(blank=True, default="")
    turf_phone = models.CharField(max_length=20, blank=True, default="")

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "facility settings"

    @classmethod
    def load(cls):
        """Stored row, or an unsaved row with defaults."""
        return cls.objects.filter(pk=SETTINGS_ROW_ID).first() or cls(pk=SETTINGS_ROW_ID)

    def save(self, *args, **kwargs):
        self.pk = SETTINGS_ROW_ID
        super().save(*args, **kwargs)

    def __str__(self):
        return self.turf_name


# =========================
# SPORT
# =========================

class Sport(models.Model):
    """
    Represents a sport played at the turf (e.g., Football, Cricket).
    """
    name = models.CharField(max_length=50, unique=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

from django.contrib import admin

from .models import FacilitySettings, Sport


@admin.register(FacilitySettings)
class FacilitySettingsAdmin(admin.ModelAdmin):
    list_display = ("turf_name", "default_price", "turf_phone", "updated_at")

    # Singleton: edit the one row, never add or remove it
    def has_add_permission(self, request):
        return not FacilitySettings.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Sport)
class SportAdmin(admin.ModelAdmin):
    list_display = ("id", "name")
    search_fields = ("name",)

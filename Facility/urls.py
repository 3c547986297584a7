from django.urls import path

from .views import FacilitySettingsView, SportView, TurfInfoView

urlpatterns = [
    path("settings/", FacilitySettingsView.as_view(), name="settings"),
    path("settings/turf/", TurfInfoView.as_view(), name="settings-turf"),
    path("settings/sports/", SportView.as_view(), name="settings-sports"),
]

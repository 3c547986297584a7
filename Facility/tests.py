from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from Accounts.models import User
from .models import FacilitySettings, Sport


class FacilitySettingsAPITests(APITestCase):

    def setUp(self):
        self.owner = User.objects.create_owner(email="owner@turf.test", password="owner-pass-123")
        self.client.force_authenticate(self.owner)

    def test_defaults_without_stored_row(self):
        response = self.client.get(reverse("settings"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["defaultPrice"], "500.00")
        self.assertEqual(response.data["turfName"], "FS Sports Club")
        self.assertFalse(FacilitySettings.objects.exists())

    def test_patch_creates_single_row(self):
        self.client.patch(reverse("settings"), {"defaultPrice": "650"}, format="json")
        response = self.client.patch(
            reverse("settings"), {"turfName": "Night Arena"}, format="json"
        )

        self.assertTrue(response.data["success"])
        self.assertEqual(FacilitySettings.objects.count(), 1)

        stored = FacilitySettings.objects.get()
        self.assertEqual(stored.pk, 1)
        self.assertEqual(stored.default_price, Decimal("650"))
        self.assertEqual(stored.turf_name, "Night Arena")

    def test_price_must_be_positive(self):
        response = self.client.patch(reverse("settings"), {"defaultPrice": "0"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_turf_info_ignores_price(self):
        response = self.client.patch(
            reverse("settings-turf"),
            {"turfAddress": "12 Ring Road", "defaultPrice": "1"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertNotIn("defaultPrice", response.data)
        self.assertEqual(FacilitySettings.load().default_price, Decimal("500"))

    def test_turf_info_get_omits_price(self):
        response = self.client.get(reverse("settings-turf"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["turfName"], "FS Sports Club")
        self.assertNotIn("defaultPrice", response.data)

    def test_requires_auth(self):
        self.client.force_authenticate(None)
        self.assertEqual(
            self.client.get(reverse("settings")).status_code, status.HTTP_401_UNAUTHORIZED
        )


class SportAPITests(APITestCase):

    def setUp(self):
        self.owner = User.objects.create_owner(email="owner@turf.test", password="owner-pass-123")
        self.client.force_authenticate(self.owner)

    def test_default_sports_when_none_configured(self):
        response = self.client.get(reverse("settings-sports"))
        self.assertEqual(response.data["sports"], ["Football", "Cricket", "Other"])

    def test_add_and_remove(self):
        response = self.client.post(reverse("settings-sports"), {"name": " Tennis "}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["name"], "Tennis")

        response = self.client.get(reverse("settings-sports"))
        self.assertEqual(response.data["sports"], ["Tennis"])

        response = self.client.delete(reverse("settings-sports"), {"name": "Tennis"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Sport.objects.exists())

    def test_duplicate_is_case_insensitive(self):
        Sport.objects.create(name="Football")

        response = self.client.post(reverse("settings-sports"), {"name": "football"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Sport.objects.count(), 1)

    def test_remove_unknown_sport_is_404(self):
        response = self.client.delete(reverse("settings-sports"), {"name": "Polo"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

from django.contrib.auth.models import AnonymousUser
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from .constants import Role
from .exceptions import ConfigurationFault
from .models import User
from .services import resolve_booking_owner


class ResolveBookingOwnerTests(TestCase):

    def test_authenticated_caller_is_owner_of_booking(self):
        subadmin = User.objects.create_user(email="sub@turf.test", password="sub-pass-123")
        self.assertEqual(resolve_booking_owner(subadmin), subadmin)

    def test_anonymous_falls_back_to_first_owner(self):
        first = User.objects.create_owner(email="first@turf.test", password="pass-12345")
        User.objects.create_owner(email="second@turf.test", password="pass-12345")

        self.assertEqual(resolve_booking_owner(AnonymousUser()), first)

    def test_inactive_owner_is_skipped(self):
        User.objects.create_owner(email="old@turf.test", password="pass-12345", is_active=False)
        active = User.objects.create_owner(email="new@turf.test", password="pass-12345")

        self.assertEqual(resolve_booking_owner(None), active)

    def test_no_owner_is_configuration_fault(self):
        User.objects.create_user(email="sub@turf.test", password="sub-pass-123")

        with self.assertRaises(ConfigurationFault):
            resolve_booking_owner(AnonymousUser())


class AuthAPITests(APITestCase):

    def setUp(self):
        self.owner = User.objects.create_owner(
            email="owner@turf.test", password="owner-pass-123", name="Owner"
        )

    def test_login_returns_tokens_and_user(self):
        response = self.client.post(
            reverse("login"),
            {"email": "owner@turf.test", "password": "owner-pass-123"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)
        self.assertEqual(response.data["user"]["role"], Role.OWNER)

    def test_access_token_authenticates_profile(self):
        tokens = self.client.post(
            reverse("login"),
            {"email": "owner@turf.test", "password": "owner-pass-123"},
            format="json",
        ).data

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        response = self.client.get(reverse("profile"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["email"], "owner@turf.test")

    def test_wrong_password_is_rejected(self):
        response = self.client.post(
            reverse("login"),
            {"email": "owner@turf.test", "password": "nope"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class SubAdminAPITests(APITestCase):

    def setUp(self):
        self.owner = User.objects.create_owner(email="owner@turf.test", password="owner-pass-123")
        self.client.force_authenticate(self.owner)

    def test_owner_manages_subadmins(self):
        response = self.client.post(
            reverse("subadmins"),
            {"email": "helper@turf.test", "password": "helper-pass-1", "name": "Helper"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["role"], Role.SUBADMIN)

        listing = self.client.get(reverse("subadmins")).data["subadmins"]
        self.assertEqual([user["email"] for user in listing], ["helper@turf.test"])

        response = self.client.delete(f"{reverse('subadmins')}?id={response.data['id']}")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(User.objects.filter(role=Role.SUBADMIN).exists())

    def test_duplicate_email_rejected(self):
        response = self.client.post(
            reverse("subadmins"),
            {"email": "owner@turf.test", "password": "helper-pass-1", "name": "Dup"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_owner_cannot_be_removed_as_subadmin(self):
        response = self.client.delete(f"{reverse('subadmins')}?id={self.owner.id}")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_missing_id(self):
        response = self.client.delete(reverse("subadmins"))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_subadmin_is_forbidden(self):
        subadmin = User.objects.create_user(email="sub@turf.test", password="sub-pass-123")
        self.client.force_authenticate(subadmin)

        response = self.client.get(reverse("subadmins"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

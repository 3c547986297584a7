from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from Accounts.models import User
from .constants import ExpenseCategory
from .models import Expense


class ExpenseAPITests(APITestCase):

    def setUp(self):
        self.owner = User.objects.create_owner(email="owner@turf.test", password="owner-pass-123")
        self.subadmin = User.objects.create_user(email="sub@turf.test", password="sub-pass-123")
        self.client.force_authenticate(self.subadmin)

    def create_expense(self, **overrides):
        values = {
            "title": "Floodlight repair",
            "amount": Decimal("1200"),
            "category": ExpenseCategory.MAINTENANCE,
            "created_by": self.owner,
        }
        values.update(overrides)
        return Expense.objects.create(**values)

    def test_requires_auth(self):
        self.client.force_authenticate(None)
        response = self.client.get(reverse("expense-list"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_create_records_creator(self):
        response = self.client.post(
            reverse("expense-list"),
            {"title": "Water bill", "amount": "350.50", "category": ExpenseCategory.WATER},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["createdBy"]["email"], "sub@turf.test")
        self.assertEqual(Expense.objects.get().amount, Decimal("350.50"))

    def test_create_validation(self):
        cases = [
            {"title": "Zero", "amount": "0", "category": ExpenseCategory.OTHER},
            {"title": "Huge", "amount": "10000000.01", "category": ExpenseCategory.OTHER},
            {"amount": "10", "category": ExpenseCategory.OTHER},
            {"title": "Bad", "amount": "10", "category": "FOOD"},
            {
                "title": "Future",
                "amount": "10",
                "category": ExpenseCategory.OTHER,
                "date": (timezone.now() + timedelta(days=3)).isoformat(),
            },
        ]

        for payload in cases:
            with self.subTest(payload=payload):
                response = self.client.post(reverse("expense-list"), payload, format="json")
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertEqual(response.data["error"], "Validation error")

        self.assertFalse(Expense.objects.exists())

    def test_description_alone_is_enough(self):
        response = self.client.post(
            reverse("expense-list"),
            {"description": "Net replacement", "amount": "90", "category": ExpenseCategory.EQUIPMENT},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_list_paginates_and_filters(self):
        for i in range(3):
            self.create_expense(amount=Decimal(100 + i))
        self.create_expense(category=ExpenseCategory.ELECTRICITY)

        response = self.client.get(reverse("expense-list"), {"page": 2, "limit": 2})
        self.assertEqual(
            response.data["pagination"],
            {"total": 4, "page": 2, "limit": 2, "totalPages": 2},
        )
        self.assertEqual(len(response.data["expenses"]), 2)

        response = self.client.get(
            reverse("expense-list"), {"category": ExpenseCategory.ELECTRICITY}
        )
        self.assertEqual(response.data["pagination"]["total"], 1)

        response = self.client.get(reverse("expense-list"), {"category": "UNKNOWN"})
        self.assertEqual(response.data["pagination"]["total"], 4)

    def test_limit_is_clamped(self):
        response = self.client.get(reverse("expense-list"), {"limit": 500, "page": 0})
        self.assertEqual(response.data["pagination"]["limit"], 100)
        self.assertEqual(response.data["pagination"]["page"], 1)

    def test_partial_update_keeps_existing_title(self):
        expense = self.create_expense()

        response = self.client.patch(
            reverse("expense-detail", args=[expense.id]), {"amount": "1500"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        expense.refresh_from_db()
        self.assertEqual(expense.amount, Decimal("1500"))
        self.assertEqual(expense.title, "Floodlight repair")

    def test_only_creator_or_owner_can_delete(self):
        expense = self.create_expense()
        url = reverse("expense-detail", args=[expense.id])

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"], "Forbidden")

        self.client.force_authenticate(self.owner)
        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Expense.objects.exists())

    def test_creator_can_delete_own_expense(self):
        expense = self.create_expense(created_by=self.subadmin)

        response = self.client.delete(reverse("expense-detail", args=[expense.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_unknown_expense_is_404(self):
        url = reverse("expense-detail", args=[999])

        for response in (
            self.client.get(url),
            self.client.patch(url, {"amount": "10"}, format="json"),
            self.client.delete(url),
        ):
            self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
            self.assertIn("error", response.data)

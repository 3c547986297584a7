from django.conf import settings
from django.db import models
from django.utils import timezone

from .constants import ExpenseCategory


class Expense(models.Model):
    """
    Money spent on running the turf.
    Feeds the net-profit figures on the dashboard.
    """

    title = models.CharField(max_length=255, null=True, blank=True)
    description = models.TextField(null=True, blank=True)

    amount = models.DecimalField(max_digits=12, decimal_places=2)

    category = models.CharField(
        max_length=20,
        choices=ExpenseCategory.CHOICES
    )

    date = models.DateTimeField(default=timezone.now)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="expenses"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date"]
        indexes = [
            models.Index(fields=["category", "date"], name="expense_category_date_idx"),
        ]

    def __str__(self):
        return f"{self.title or self.category} | {self.amount}"

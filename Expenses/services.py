import logging
import math

from .models import Expense

logger = logging.getLogger(__name__)


def list_expenses(page=1, limit=100, category=None):
    qs = Expense.objects.select_related("created_by").order_by("-date")

    if category:
        qs = qs.filter(category=category)

    total = qs.count()
    offset = (page - 1) * limit

    return list(qs[offset:offset + limit]), {
        "total": total,
        "page": page,
        "limit": limit,
        "totalPages": math.ceil(total / limit),
    }


def can_delete_expense(user, expense):
    # Creator or the turf owner
    return expense.created_by_id == user.id or user.is_owner


def delete_expense(expense, user):
    expense_id = expense.pk
    expense.delete()
    logger.info("Expense %s deleted by %s", expense_id, user.pk)

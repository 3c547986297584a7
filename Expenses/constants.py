# expenses/constants.py
from decimal import Decimal


class ExpenseCategory:
    MAINTENANCE = "MAINTENANCE"
    ELECTRICITY = "ELECTRICITY"
    WATER = "WATER"
    STAFF_SALARY = "STAFF_SALARY"
    EQUIPMENT = "EQUIPMENT"
    OTHER = "OTHER"

    CHOICES = (
        (MAINTENANCE, "Maintenance"),
        (ELECTRICITY, "Electricity"),
        (WATER, "Water"),
        (STAFF_SALARY, "Staff Salary"),
        (EQUIPMENT, "Equipment"),
        (OTHER, "Other"),
    )


MAX_EXPENSE_AMOUNT = Decimal("10000000")
TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000

DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 100

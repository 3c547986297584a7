# facility/constants.py
from decimal import Decimal

SETTINGS_ROW_ID = 1

DEFAULT_PRICE = Decimal("500")
DEFAULT_TURF_NAME = "FS Sports Club"

# Shown when no sport has been configured yet
DEFAULT_SPORTS = ("Football", "Cricket", "Other")

# slots/constants.py
class SlotStatus:
    AVAILABLE = "AVAILABLE"
    BOOKED = "BOOKED"

    CHOICES = (
        (AVAILABLE, "Available"),
        (BOOKED, "Booked"),
    )


# Public viewer shows the day as fixed two-hour blocks
SLOT_HOURS = 2
DAYS_SHOWN = 2
DATE_SELECTOR_DAYS = 6

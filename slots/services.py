from datetime import datetime, time, timedelta

from django.utils import timezone

from Bookings.constants import BookingStatus
from Bookings.models import Booking
from Facility.models import FacilitySettings
from .constants import DATE_SELECTOR_DAYS, DAYS_SHOWN, SLOT_HOURS, SlotStatus


def build_date_selector(selected_date):
    start_date = selected_date - timedelta(days=1)

    days = []
    for i in range(DATE_SELECTOR_DAYS):
        current = start_date + timedelta(days=i)
        days.append({
            "day_name": current.strftime("%a").upper(),
            "day_number": current.strftime("%d"),
            "full_date": current.isoformat(),
            "is_selected": current == selected_date
        })

    return {
        "current_date": selected_date.isoformat(),
        "month_label": selected_date.strftime("%B %Y"),
        "days": days
    }


def day_label(day, selected_date):
    offset = (day - selected_date).days
    if offset == 0:
        return "Today"
    if offset == 1:
        return "Tomorrow"
    return day.strftime("%A")


def generate_blocks(day):
    """Fixed blocks of SLOT_HOURS covering the whole local day."""
    day_start = timezone.make_aware(datetime.combine(day, time.min))

    return [
        (
            day_start + timedelta(hours=hour),
            day_start + timedelta(hours=hour + SLOT_HOURS),
        )
        for hour in range(0, 24, SLOT_HOURS)
    ]


def fetch_day_bookings(day):
    day_start = timezone.make_aware(datetime.combine(day, time.min))
    day_end = day_start + timedelta(days=1)

    return list(
        Booking.objects
        .filter(start_time__lt=day_end, end_time__gt=day_start)
        .exclude(status=BookingStatus.CANCELLED)
        .order_by("start_time")
    )


def resolve_block(block_start, block_end, bookings):
    # A block is taken by a booking lying entirely inside it
    for booking in bookings:
        if booking.start_time >= block_start and booking.end_time <= block_end:
            return booking
    return None


def format_slot(idx, block_start, block_end, booking, price):
    local_start = timezone.localtime(block_start)
    local_end = timezone.localtime(block_end)

    return {
        "id": f"slot_{idx:02}",
        "start_time": local_start.isoformat(),
        "end_time": local_end.isoformat(),
        "time_label": f"{local_start:%I:%M %p} - {local_end:%I:%M %p}",
        "status": SlotStatus.BOOKED if booking else SlotStatus.AVAILABLE,
        "is_selectable": booking is None,
        "price_display": f"₹{price:.2f}" if booking is None else None,
        "booking": (
            {
                "status": booking.status,
                "is_recurring": booking.is_recurring,
            }
            if booking else None
        ),
    }


def build_day_slots(day, selected_date, price):
    bookings = fetch_day_bookings(day)

    slots = []
    for idx, (block_start, block_end) in enumerate(generate_blocks(day), start=1):
        booking = resolve_block(block_start, block_end, bookings)
        slots.append(format_slot(idx, block_start, block_end, booking, price))

    return {
        "date": day.isoformat(),
        "day_label": day_label(day, selected_date),
        "slots": slots,
    }


def build_slots_response(selected_date):
    facility = FacilitySettings.load()

    return {
        "turf_details": {
            "name": facility.turf_name,
            "location": facility.turf_address,
            "phone": facility.turf_phone,
        },
        "date_selector": build_date_selector(selected_date),
        "days": [
            build_day_slots(
                selected_date + timedelta(days=offset),
                selected_date,
                facility.default_price,
            )
            for offset in range(DAYS_SHOWN)
        ],
    }

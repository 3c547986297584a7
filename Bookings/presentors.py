from rest_framework import serializers


def format_timestamp(value):
    return serializers.DateTimeField().to_representation(value)


def build_series_response(result):
    return {
        "success": True,
        "message": f"Successfully created {result.count} recurring bookings",
        "bookings": result.count,
        "parentBookingId": result.parent_booking_id,
        "dates": [format_timestamp(d) for d in result.dates],
    }


def build_cancel_response(count):
    return {
        "success": True,
        "message": f"Cancelled {count} booking(s)",
        "cancelled": count,
    }

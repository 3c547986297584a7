from django.urls import path

from .views import BookingDetailView, BookingListCreateView, RecurringBookingView

urlpatterns = [
    path("bookings/", BookingListCreateView.as_view(), name="booking-list"),
    path("bookings/recurring/", RecurringBookingView.as_view(), name="booking-recurring"),
    path("bookings/<int:booking_id>/", BookingDetailView.as_view(), name="booking-detail"),
]

from functools import partial

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from Accounts.services import resolve_booking_owner
from .models import Booking
from .presentors import build_cancel_response, build_series_response
from .serializers import (
    BookingListQuerySerializer,
    BookingSerializer,
    BookingUpdateSerializer,
    BookingWriteSerializer,
    RecurringBookingSerializer,
    SeriesCancelQuerySerializer,
)
from .services import (
    RecurringBookingPlanner,
    cancel_series,
    create_booking,
    get_series,
    update_booking,
)


class PublicWriteThrottleMixin:
    """
    Rate limits POST requests only (scope "bookings").
    Reads stay unthrottled.
    """
    throttle_scope = "bookings"

    def get_throttles(self):
        if self.request.method == "POST":
            return [ScopedRateThrottle()]
        return []


# -------------------------------------------------------------------
# BOOKINGS (LIST + CREATE)
# -------------------------------------------------------------------
class BookingListCreateView(PublicWriteThrottleMixin, APIView):
    """
    Public API
    GET lists bookings (optional date range / status filter)
    POST creates a single booking, attributed to the caller or the owner
    """
    permission_classes = [AllowAny]

    def get(self, request):
        query = BookingListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        filters = query.validated_data

        bookings = Booking.objects.select_related("created_by")

        if "startDate" in filters and "endDate" in filters:
            bookings = bookings.filter(
                start_time__gte=filters["startDate"],
                start_time__lte=filters["endDate"],
            )

        booking_status = filters.get("status")
        if booking_status and booking_status != "ALL":
            bookings = bookings.filter(status=booking_status)

        serializer = BookingSerializer(bookings.order_by("start_time"), many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    def post(self, request):
        serializer = BookingWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = create_booking(
            serializer.to_booking_data(),
            resolve_owner=partial(resolve_booking_owner, request.user),
        )

        return Response(
            BookingSerializer(booking).data,
            status=status.HTTP_201_CREATED
        )


# -------------------------------------------------------------------
# BOOKING DETAIL (UPDATE + DELETE)
# -------------------------------------------------------------------
class BookingDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, booking_id):
        booking = get_object_or_404(Booking, id=booking_id)
        return Response(BookingSerializer(booking).data)

    def patch(self, request, booking_id):
        booking = get_object_or_404(Booking, id=booking_id)

        serializer = BookingUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = update_booking(booking, serializer.to_update())
        return Response(BookingSerializer(booking).data)

    def delete(self, request, booking_id):
        booking = get_object_or_404(Booking, id=booking_id)
        booking.delete()

        return Response({"message": "Booking deleted successfully"})


# -------------------------------------------------------------------
# RECURRING SERIES
# -------------------------------------------------------------------
class RecurringBookingView(PublicWriteThrottleMixin, APIView):
    """
    POST   creates a whole series (public, owner fallback)
    GET    lists one series        (?parentBookingId=)
    DELETE cancels one series      (?parentBookingId=&type=all|future)
    """
    planner_class = RecurringBookingPlanner

    def get_permissions(self):
        if self.request.method == "POST":
            return [AllowAny()]
        return [IsAuthenticated()]

    def post(self, request):
        serializer = RecurringBookingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.planner_class().plan_series(
            serializer.to_template(),
            serializer.to_rule(),
            resolve_owner=partial(resolve_booking_owner, request.user),
        )

        return Response(
            build_series_response(result),
            status=status.HTTP_201_CREATED
        )

    def get(self, request):
        bookings = get_series(request.query_params.get("parentBookingId"))
        return Response({"bookings": BookingSerializer(bookings, many=True).data})

    def delete(self, request):
        query = SeriesCancelQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        count = cancel_series(
            query.validated_data["parentBookingId"],
            scope=query.validated_data["type"],
        )
        return Response(build_cancel_response(count), status=status.HTTP_200_OK)

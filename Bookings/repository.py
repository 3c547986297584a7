from django.db import transaction
from django.db.models import Q

from .constants import BookingStatus
from .models import Booking


class BookingRepository:
    """
    Persistence boundary for booking writes and overlap lookups.
    Services go through this class instead of touching the ORM.
    """

    def __init__(self, model=Booking):
        self.model = model

    def find_overlapping(
        self,
        intervals,
        exclude_statuses=(BookingStatus.CANCELLED,),
        exclude_pk=None,
        lock=False,
    ):
        """
        Return (start, end) of every stored booking overlapping any of the
        given intervals. One query regardless of how many intervals.
        """
        if not intervals:
            return []

        overlap = Q()
        for start, end in intervals:
            overlap |= Q(start_time__lt=end, end_time__gt=start)

        qs = self.model.objects.filter(overlap).exclude(status__in=exclude_statuses)

        if exclude_pk is not None:
            qs = qs.exclude(pk=exclude_pk)

        # Lock conflicting rows to prevent race conditions
        if lock:
            qs = qs.select_for_update()

        return list(qs.values_list("start_time", "end_time"))

    def create_many(self, instances):
        with transaction.atomic():
            return self.model.objects.bulk_create(instances)

    def update_many_status(self, parent_id, new_status, min_start_time=None):
        qs = self.model.objects.filter(parent_booking_id=parent_id)

        if min_start_time is not None:
            qs = qs.filter(start_time__gte=min_start_time)

        # Rows already in the target status are not counted again
        return qs.exclude(status=new_status).update(status=new_status)

    def list_series(self, parent_id):
        return list(
            self.model.objects
            .filter(parent_booking_id=parent_id)
            .select_related("created_by")
            .order_by("start_time")
        )

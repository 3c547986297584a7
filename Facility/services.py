import logging

from django.db import IntegrityError, transaction

from .constants import DEFAULT_SPORTS
from .exceptions import SportAlreadyExists
from .models import FacilitySettings, Sport

logger = logging.getLogger(__name__)


def get_settings():
    return FacilitySettings.load()


def update_settings(changes):
    with transaction.atomic():
        settings_row = FacilitySettings.load()
        for field, value in changes.items():
            setattr(settings_row, field, value)
        settings_row.save()

    logger.info("Facility settings updated: %s", ", ".join(sorted(changes)))
    return settings_row


def list_sport_names():
    names = list(Sport.objects.values_list("name", flat=True))
    return names or list(DEFAULT_SPORTS)


def add_sport(name):
    if Sport.objects.filter(name__iexact=name).exists():
        raise SportAlreadyExists()

    try:
        with transaction.atomic():
            return Sport.objects.create(name=name)
    except IntegrityError:
        raise SportAlreadyExists()


def remove_sport(name):
    deleted, _ = Sport.objects.filter(name=name).delete()
    return bool(deleted)

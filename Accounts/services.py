import logging

from django.db import transaction

from .constants import Role
from .exceptions import ConfigurationFault
from .models import User

logger = logging.getLogger(__name__)


def get_fallback_owner():
    return (
        User.objects
        .filter(role=Role.OWNER, is_active=True)
        .order_by("created_at", "id")
        .first()
    )


def resolve_booking_owner(user):
    """
    Account recorded as creator of a booking.
    Public (anonymous) requests are attributed to the first owner account.
    """
    if user is not None and user.is_authenticated:
        return user

    owner = get_fallback_owner()
    if owner is None:
        logger.error("No owner account configured; cannot attribute public booking")
        raise ConfigurationFault()

    logger.debug("Attributing public booking to owner %s", owner.pk)
    return owner


def list_subadmins():
    return User.objects.filter(role=Role.SUBADMIN).order_by("-created_at")


def create_subadmin(email, password, name):
    with transaction.atomic():
        user = User.objects.create_user(
            email=email,
            password=password,
            name=name,
            role=Role.SUBADMIN,
        )
    logger.info("Created sub-admin %s", user.email)
    return user


def remove_subadmin(user_id):
    """Delete a sub-admin. Returns False when no sub-admin has that id."""
    deleted, _ = User.objects.filter(id=user_id, role=Role.SUBADMIN).delete()
    if deleted:
        logger.info("Removed sub-admin %s", user_id)
    return bool(deleted)

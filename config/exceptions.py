import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.db import DatabaseError
from django.http import Http404
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.views import exception_handler

from Bookings.exceptions import PersistenceFault

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """
    Renders every API error as {"error": <message>}.

    Serializer errors keep their field map under "details"; domain errors
    may attach extra keys (e.g. "conflicts"). Database errors that escape
    a view are logged and surfaced as a generic server fault.
    """
    if isinstance(exc, Http404):
        exc = NotFound(*exc.args)
    elif isinstance(exc, DjangoPermissionDenied):
        exc = PermissionDenied(*exc.args)
    elif isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.exception(
            "Unhandled database error in %s", view.__class__.__name__ if view else "?"
        )
        exc = PersistenceFault()

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        response.data = {"error": "Validation error", "details": response.data}
        return response

    data = {"error": str(exc.detail)}
    data.update(getattr(exc, "extra", None) or {})
    response.data = data
    return response

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.db import DatabaseError
from django.http import Http404
from django.test import SimpleTestCase

from .exceptions import api_exception_handler


class ApiExceptionHandlerTests(SimpleTestCase):

    def test_django_404_renders_as_error_body(self):
        response = api_exception_handler(Http404("No Booking matches the given query."), {})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data, {"error": "No Booking matches the given query."})

    def test_bare_django_404_uses_default_message(self):
        response = api_exception_handler(Http404(), {})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data, {"error": "Not found."})

    def test_django_permission_denied_is_403(self):
        response = api_exception_handler(DjangoPermissionDenied("Forbidden"), {})

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data, {"error": "Forbidden"})

    def test_database_error_is_generic_500(self):
        with self.assertLogs("config.exceptions", level="ERROR"):
            response = api_exception_handler(DatabaseError("disk I/O error"), {})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data, {"error": "Failed to save bookings"})

from rest_framework import status
from rest_framework.exceptions import APIException


class ConfigurationFault(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "System configuration error: No admin user found"
    default_code = "configuration_fault"

from rest_framework import status
from rest_framework.exceptions import APIException


class SportAlreadyExists(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Sport already exists"
    default_code = "sport_exists"

"""
HTTP status codes used by formfile responses.
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    HTTP_200_OK = 200
    HTTP_400_BAD_REQUEST = 400
    HTTP_500_INTERNAL_SERVER_ERROR = 500

from typing import Union

from .response import Response
from .status import HTTPStatus


class FormFileError(Exception):
    """Base error for formfile. Carries the HTTP status a host should answer with."""

    status_code: Union[int, HTTPStatus] = HTTPStatus.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> Response:
        return Response(
            self.message.encode("utf-8"),
            status_code=self.status_code,
            content_type="text/plain; charset=utf-8",
        )


class Base64DecodeError(FormFileError, ValueError):
    status_code = HTTPStatus.HTTP_400_BAD_REQUEST


class InvalidUploadFileError(FormFileError, ValueError):
    pass

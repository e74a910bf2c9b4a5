"""
Unit tests for formfile exceptions.
"""

from formfile import Base64DecodeError, FormFileError, HTTPStatus, InvalidUploadFileError


class TestExceptions:

    def test_decode_error_maps_to_bad_request(self):
        response = Base64DecodeError("Invalid base64 data").to_response()
        assert response.status_code == 400
        assert response.body == b"Invalid base64 data"
        assert response.content_type == "text/plain; charset=utf-8"

    def test_invalid_upload_maps_to_server_error(self):
        error = InvalidUploadFileError("no backing")
        assert error.status_code == HTTPStatus.HTTP_500_INTERNAL_SERVER_ERROR
        assert error.to_response().status_code == 500

    def test_hierarchy(self):
        assert issubclass(Base64DecodeError, FormFileError)
        assert issubclass(Base64DecodeError, ValueError)
        assert issubclass(InvalidUploadFileError, ValueError)
        assert str(FormFileError("boom")) == "boom"

import uuid

import pytest

from formfile import UploadFile, reset_settings


@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts from default settings and an unconfigured package logger."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def make_temp_upload(tmp_path):
    """Build an UploadFile backed by a temp file, the way a multipart parser would."""

    def _make(content: bytes, filename: str = "test.txt", content_type: str = "text/plain"):
        temp_path = tmp_path / f"tmp-{uuid.uuid4().hex}"
        temp_path.write_bytes(content)
        return UploadFile(
            filename=filename,
            temp_path=str(temp_path),
            size=len(content),
            content_type=content_type,
        )

    return _make

"""
Unit tests for base64 conversion.
"""

import logging

import pytest

from formfile import Base64DecodeError, from_base64, to_base64


class TestToBase64:

    def test_hello(self):
        assert to_base64(b"Hello") == "SGVsbG8="

    def test_empty(self):
        assert to_base64(b"") == ""

    def test_deterministic(self):
        data = bytes(range(256))
        assert to_base64(data) == to_base64(data)

    def test_standard_alphabet(self):
        """Test the standard alphabet is used, not the URL-safe one."""
        assert to_base64(b"\xfb\xff") == "+/8="


class TestFromBase64:

    def test_hello(self):
        data = from_base64("SGVsbG8=")
        assert data == b"Hello"
        assert len(data) == 5

    def test_bytes_input(self):
        assert from_base64(b"SGVsbG8=") == b"Hello"

    def test_empty(self):
        assert from_base64("") == b""

    @pytest.mark.parametrize("data", [b"", b"\x00", b"ab", bytes(range(256)), "名前".encode()])
    def test_round_trip(self, data):
        assert from_base64(to_base64(data)) == data

    @pytest.mark.parametrize("text", ["not-base64!", "SGVsbG8", "SGVs bG8=", "SGVsbG8=*", "名前"])
    def test_invalid_input_rejected(self, text):
        """Test bad characters and bad padding raise instead of returning garbage."""
        with pytest.raises(Base64DecodeError):
            from_base64(text)

    def test_decode_error_is_value_error(self):
        with pytest.raises(ValueError):
            from_base64("not-base64!")

    def test_decode_error_chains_cause(self):
        with pytest.raises(Base64DecodeError) as exc_info:
            from_base64("not-base64!")
        assert exc_info.value.__cause__ is not None

    def test_decode_error_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="formfile"):
            with pytest.raises(Base64DecodeError):
                from_base64("not-base64!")
        assert any("Rejected base64 input" in r.getMessage() for r in caplog.records)

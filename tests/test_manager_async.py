"""
Unit tests for the awaitable conversion helpers.
"""

import pytest

from formfile import (
    FileBytes,
    UploadFile,
    to_bytes,
    to_bytes_async,
    to_file,
    to_bytes_list_async,
    to_file_async,
    to_files_async,
    to_files_in_directory_async,
)


class FailingUpload(UploadFile):
    async def iter_chunks(self, chunk_size=65536):
        raise OSError("stream unavailable")
        yield b""


class TestToBytesAsync:
    """Test async reading into memory."""

    @pytest.mark.asyncio
    async def test_matches_blocking_variant(self, make_temp_upload):
        upload = make_temp_upload(b"same bytes either way", content_type="text/plain")
        assert await to_bytes_async(upload) == to_bytes(upload)

    @pytest.mark.asyncio
    async def test_in_memory_upload(self):
        result = await to_bytes_async(UploadFile.from_bytes(b"abc", content_type="text/csv"))
        assert result == FileBytes(b"abc", "text/csv")

    @pytest.mark.asyncio
    async def test_empty_upload(self, make_temp_upload):
        result = await to_bytes_async(make_temp_upload(b""))
        assert result.content == b""

    @pytest.mark.asyncio
    async def test_list_preserves_order(self, make_temp_upload):
        uploads = [make_temp_upload(f"item {i}".encode()) for i in range(4)]
        results = await to_bytes_list_async(uploads)
        assert [r.content for r in results] == [f"item {i}".encode() for i in range(4)]

    @pytest.mark.asyncio
    async def test_list_first_failure_aborts(self):
        uploads = [UploadFile.from_bytes(b"ok"), FailingUpload.from_bytes(b"bad")]
        with pytest.raises(OSError, match="stream unavailable"):
            await to_bytes_list_async(uploads)


class TestToFileAsync:
    """Test async writes to disk."""

    @pytest.mark.asyncio
    async def test_writes_content(self, tmp_path, make_temp_upload):
        target = tmp_path / "out.bin"
        await to_file_async(make_temp_upload(b"0123456789"), target, chunk_size=4)
        assert target.read_bytes() == b"0123456789"

    @pytest.mark.asyncio
    async def test_empty_upload_creates_empty_file(self, tmp_path):
        target = tmp_path / "empty.bin"
        await to_file_async(UploadFile.from_bytes(b""), target)
        assert target.exists()
        assert target.stat().st_size == 0

    @pytest.mark.asyncio
    async def test_overwrites_existing_file(self, tmp_path):
        target = tmp_path / "out.bin"
        target.write_bytes(b"old content that is longer")
        await to_file_async(UploadFile.from_bytes(b"new"), target)
        assert target.read_bytes() == b"new"

    @pytest.mark.asyncio
    async def test_missing_directory_propagates(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await to_file_async(UploadFile.from_bytes(b"x"), tmp_path / "missing" / "out")

    @pytest.mark.asyncio
    async def test_same_path_batch_last_wins(self, tmp_path):
        target = tmp_path / "out.txt"
        await to_files_async(
            [UploadFile.from_bytes(b"first upload"), UploadFile.from_bytes(b"second")],
            target,
        )
        assert target.read_bytes() == b"second"

    @pytest.mark.asyncio
    async def test_directory_batch(self, tmp_path, make_temp_upload):
        uploads = [
            make_temp_upload(b"one", filename="one.txt"),
            make_temp_upload(b"two", filename=""),
        ]
        paths = await to_files_in_directory_async(uploads, tmp_path)
        assert paths == [str(tmp_path / "one.txt"), str(tmp_path / "upload-1")]
        assert (tmp_path / "upload-1").read_bytes() == b"two"


class TestChunkSizeParity:
    """Test blocking and awaitable variants treat chunk_size the same way."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("in_memory", [True, False])
    @pytest.mark.parametrize("chunk_size", [1, 3, 10, 64])
    async def test_same_output_for_valid_sizes(self, tmp_path, make_temp_upload, in_memory, chunk_size):
        content = b"0123456789"
        upload = UploadFile.from_bytes(content) if in_memory else make_temp_upload(content)
        blocking, awaited = tmp_path / "blocking.bin", tmp_path / "awaited.bin"

        to_file(upload, blocking, chunk_size=chunk_size)
        await to_file_async(upload, awaited, chunk_size=chunk_size)

        assert blocking.read_bytes() == awaited.read_bytes() == content
        assert (await to_bytes_async(upload, chunk_size=chunk_size)).content == content

    @pytest.mark.asyncio
    @pytest.mark.parametrize("in_memory", [True, False])
    @pytest.mark.parametrize("chunk_size", [0, -1])
    async def test_non_positive_sizes_rejected_by_both(self, tmp_path, make_temp_upload, in_memory, chunk_size):
        """Test a bad size raises before the target is opened, so nothing is truncated."""
        upload = UploadFile.from_bytes(b"0123456789") if in_memory else make_temp_upload(b"0123456789")
        target = tmp_path / "out.bin"
        target.write_bytes(b"existing")

        with pytest.raises(ValueError, match="chunk_size must be greater than 0"):
            to_file(upload, target, chunk_size=chunk_size)
        with pytest.raises(ValueError, match="chunk_size must be greater than 0"):
            await to_file_async(upload, target, chunk_size=chunk_size)
        with pytest.raises(ValueError, match="chunk_size must be greater than 0"):
            await to_bytes_async(upload, chunk_size=chunk_size)

        assert target.read_bytes() == b"existing"

"""
UploadFile class for handling uploaded form files in formfile.
"""

import io
import os
import shutil
from typing import IO, AsyncIterator, Optional

import aiofiles

from .exceptions import InvalidUploadFileError

DEFAULT_CHUNK_SIZE = 64 * 1024


def check_chunk_size(chunk_size: int) -> int:
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be greater than 0, got {chunk_size}")
    return chunk_size


class UploadFile:
    """
    Container for one uploaded form file with read-only content access.

    The content lives either in a temporary file written by a multipart
    parser (temp_path) or in memory (content). Use upload_file.open() to get
    a standard Python file handle for reading.

    Attributes:
        filename: Original filename of the uploaded file
        name: Name of the form field the file was submitted under
        size: Size of the file in bytes
        content_type: MIME type of the file
    """

    def __init__(
        self,
        filename: str,
        temp_path: Optional[str] = None,
        size: int = 0,
        content_type: str = "",
        name: str = "",
        content: Optional[bytes] = None,
    ):
        if (temp_path is None) == (content is None):
            raise InvalidUploadFileError(
                "UploadFile needs exactly one of temp_path or content"
            )

        self.filename = filename
        self.name = name
        self.size = len(content) if content is not None else size
        self.content_type = content_type
        self._temp_path = temp_path
        self._content = content

    @classmethod
    def from_bytes(
        cls,
        content: bytes,
        filename: str = "",
        name: str = "",
        content_type: str = "",
    ) -> "UploadFile":
        """Build an in-memory UploadFile around a byte buffer."""
        return cls(
            filename=filename,
            name=name,
            content_type=content_type,
            content=bytes(content),
        )

    @property
    def in_memory(self) -> bool:
        return self._content is not None

    def open(self, mode: str = "rb") -> IO:
        """
        Open the uploaded file for reading.

        Every call returns a fresh handle positioned at the start of the content.

        Args:
            mode: File mode. Only read modes allowed ('r', 'rb').
                 Defaults to 'rb' for binary reading.

        Returns:
            Standard Python file handle for reading

        Raises:
            ValueError: If write mode is attempted

        Example:
            with upload_file.open() as f:
                content = f.read()
        """
        if "w" in mode or "a" in mode or "+" in mode or "x" in mode:
            raise ValueError(
                "Write operations not allowed on uploaded files. "
                "Use get_path() for advanced operations requiring write access."
            )

        if self._content is None:
            return open(self._temp_path, mode)

        stream = io.BytesIO(self._content)
        if "b" in mode:
            return stream
        return io.TextIOWrapper(stream, encoding="utf-8")

    def read(self) -> bytes:
        with self.open() as f:
            return f.read()

    def copy_to(self, destination: IO[bytes], chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        """
        Copy the whole content into a writable binary stream.

        The destination is not closed.
        """
        check_chunk_size(chunk_size)
        with self.open() as source:
            shutil.copyfileobj(source, destination, chunk_size)

    async def iter_chunks(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
        """
        Yield the content in chunks of at most chunk_size bytes.

        Temp-file backed uploads are read through aiofiles, so each read
        suspends the calling task.
        """
        check_chunk_size(chunk_size)
        if self._content is not None:
            for start in range(0, len(self._content), chunk_size):
                yield self._content[start : start + chunk_size]
            return

        async with aiofiles.open(self._temp_path, "rb") as f:
            while chunk := await f.read(chunk_size):
                yield chunk

    async def read_async(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
        buffer = io.BytesIO()
        async for chunk in self.iter_chunks(chunk_size):
            buffer.write(chunk)
        return buffer.getvalue()

    async def copy_to_async(self, destination, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        """
        Copy the whole content into an aiofiles binary file opened for writing.
        """
        async for chunk in self.iter_chunks(chunk_size):
            await destination.write(chunk)

    def get_path(self) -> Optional[str]:
        """
        Get temporary file path for advanced operations.

        Warning: Direct path access allows write operations.
        Use open() method for safe read-only access.

        Returns:
            Absolute path to the temporary file, or None for in-memory uploads
        """
        return self._temp_path

    def cleanup(self) -> None:
        """
        Clean up temporary file. In-memory uploads have nothing to clean up.
        """
        if self._temp_path and os.path.exists(self._temp_path):
            os.unlink(self._temp_path)

    def __repr__(self) -> str:
        return f"UploadFile(filename='{self.filename}', size={self.size}, content_type='{self.content_type}')"

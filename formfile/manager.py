"""
Conversions between uploaded form files, byte buffers, base64 text,
files on disk and file stream responses.

Each blocking function has an awaitable twin where I/O is involved. Batch
functions run item by item in input order and stop at the first failure.
"""

import base64
import io
import logging
import os
from typing import Callable, Iterable, List, NamedTuple, Optional, Union

import aiofiles

from .exceptions import Base64DecodeError
from .logger import get_logger
from .response import FileStreamResponse
from .settings import get_settings
from .upload_file import UploadFile, check_chunk_size

logger = get_logger(__name__)

PathLike = Union[str, "os.PathLike[str]"]
FileNaming = Callable[[int, UploadFile], str]


class FileBytes(NamedTuple):
    """Content of an upload together with the content type it was sent with."""

    content: bytes
    content_type: str


def _chunk_size(chunk_size: Optional[int]) -> int:
    """Resolve an explicit chunk size or the configured one. Raises ValueError if not > 0."""
    if chunk_size is None:
        return get_settings().chunk_size
    return check_chunk_size(chunk_size)


# ------------------ UPLOAD -> BYTES ------------------

def to_bytes(upload_file: UploadFile, chunk_size: Optional[int] = None) -> FileBytes:
    """Read the whole upload into memory."""
    buffer = io.BytesIO()
    upload_file.copy_to(buffer, _chunk_size(chunk_size))
    content = buffer.getvalue()

    logger.debug(
        "Read upload into memory",
        extra={"upload_name": upload_file.filename, "content_type": upload_file.content_type, "size": len(content)},
    )
    return FileBytes(content, upload_file.content_type)


async def to_bytes_async(upload_file: UploadFile, chunk_size: Optional[int] = None) -> FileBytes:
    content = await upload_file.read_async(_chunk_size(chunk_size))

    logger.debug(
        "Read upload into memory",
        extra={"upload_name": upload_file.filename, "content_type": upload_file.content_type, "size": len(content)},
    )
    return FileBytes(content, upload_file.content_type)


def to_bytes_list(
    upload_files: Iterable[UploadFile], chunk_size: Optional[int] = None
) -> List[FileBytes]:
    return [to_bytes(upload_file, chunk_size) for upload_file in upload_files]


async def to_bytes_list_async(
    upload_files: Iterable[UploadFile], chunk_size: Optional[int] = None
) -> List[FileBytes]:
    results = []
    for upload_file in upload_files:
        results.append(await to_bytes_async(upload_file, chunk_size))
    return results


# ------------------ UPLOAD -> FILE ------------------

def to_file(upload_file: UploadFile, path: PathLike, chunk_size: Optional[int] = None) -> None:
    """
    Write the upload to path, replacing any existing file.

    The parent directory must exist. OSError from the filesystem propagates
    and a partially written file is left in place.
    """
    chunk_size = _chunk_size(chunk_size)
    with open(path, "wb") as destination:
        upload_file.copy_to(destination, chunk_size)

    logger.debug(
        "Saved upload",
        extra={"upload_name": upload_file.filename, "path": os.fspath(path), "size": upload_file.size},
    )


async def to_file_async(upload_file: UploadFile, path: PathLike, chunk_size: Optional[int] = None) -> None:
    chunk_size = _chunk_size(chunk_size)
    async with aiofiles.open(path, "wb") as destination:
        await upload_file.copy_to_async(destination, chunk_size)

    logger.debug(
        "Saved upload",
        extra={"upload_name": upload_file.filename, "path": os.fspath(path), "size": upload_file.size},
    )


def to_files(upload_files: Iterable[UploadFile], path: PathLike, chunk_size: Optional[int] = None) -> None:
    """
    Write every upload to the same path, one after the other.

    Each write replaces the previous one, so only the last upload survives.
    Use to_files_in_directory() to keep all of them.
    """
    for upload_file in upload_files:
        to_file(upload_file, path, chunk_size)


async def to_files_async(upload_files: Iterable[UploadFile], path: PathLike, chunk_size: Optional[int] = None) -> None:
    for upload_file in upload_files:
        await to_file_async(upload_file, path, chunk_size)


def default_file_naming(index: int, upload_file: UploadFile) -> str:
    """Use the basename of the client filename, or upload-<index> when there is none."""
    # Strip any client-side directories, including Windows ones
    filename = os.path.basename((upload_file.filename or "").replace("\\", "/"))
    if filename in ("", ".", ".."):
        return f"upload-{index}"
    return filename


def _unique_name(name: str, used: set) -> str:
    stem, ext = os.path.splitext(name)
    candidate, counter = name, 1
    while candidate in used:
        candidate = f"{stem}-{counter}{ext}"
        counter += 1
    return candidate


def _target_paths(
    upload_files: Iterable[UploadFile], directory: PathLike, naming: Optional[FileNaming]
):
    naming = naming or default_file_naming
    used = set()
    for index, upload_file in enumerate(upload_files):
        # two uploads may share a client filename
        name = _unique_name(naming(index, upload_file), used)
        used.add(name)
        yield upload_file, os.path.join(directory, name)


def to_files_in_directory(
    upload_files: Iterable[UploadFile],
    directory: PathLike,
    naming: Optional[FileNaming] = None,
    chunk_size: Optional[int] = None,
) -> List[str]:
    """
    Write each upload to its own file inside an existing directory.

    Args:
        upload_files: Uploads to write, in order
        directory: Target directory, must already exist
        naming: Callable (index, upload_file) -> file name. Defaults to default_file_naming.
            A name already used in this batch gets a -<n> suffix before its extension

    Returns:
        Paths of the written files, in input order
    """
    written = []
    for upload_file, path in _target_paths(upload_files, directory, naming):
        to_file(upload_file, path, chunk_size)
        written.append(path)
    return written


async def to_files_in_directory_async(
    upload_files: Iterable[UploadFile],
    directory: PathLike,
    naming: Optional[FileNaming] = None,
    chunk_size: Optional[int] = None,
) -> List[str]:
    written = []
    for upload_file, path in _target_paths(upload_files, directory, naming):
        await to_file_async(upload_file, path, chunk_size)
        written.append(path)
    return written


# ------------------ BASE64 ------------------

def to_base64(data: bytes) -> str:
    """Standard alphabet, padded."""
    return base64.b64encode(data).decode("ascii")


def from_base64(text: Union[str, bytes]) -> bytes:
    """
    Decode standard padded base64.

    Raises:
        Base64DecodeError: If the text has characters outside the base64
            alphabet or wrong padding
    """
    try:
        return base64.b64decode(text, validate=True)
    except ValueError as e:  # binascii.Error, or non-ASCII text
        logger.warning("Rejected base64 input: %s", e)
        raise Base64DecodeError(f"Invalid base64 data: {e}") from e


# ------------------ BYTES <-> RESPONSE <-> UPLOAD ------------------

def to_file_stream_response(
    data: bytes, content_type: str, filename: Optional[str] = None
) -> FileStreamResponse:
    """Wrap a byte buffer as a response body stream tagged with content_type."""
    return FileStreamResponse(
        io.BytesIO(data),
        content_type,
        filename=filename,
        chunk_size=_chunk_size(None),
    )


def response_to_upload_file(
    response: FileStreamResponse,
    name: Optional[str] = None,
    filename: Optional[str] = None,
) -> UploadFile:
    """
    Read the response stream fully and build an in-memory UploadFile from it.

    name and filename fall back to the configured default_name and
    default_filename.
    """
    settings = get_settings()
    return UploadFile.from_bytes(
        response.read_all(),
        filename=settings.default_filename if filename is None else filename,
        name=settings.default_name if name is None else name,
        content_type=response.content_type,
    )


def bytes_to_upload_file(
    data: bytes,
    content_type: Optional[str] = None,
    name: Optional[str] = None,
    filename: Optional[str] = None,
) -> UploadFile:
    if content_type is None:
        content_type = get_settings().default_content_type
    return response_to_upload_file(
        to_file_stream_response(data, content_type), name=name, filename=filename
    )

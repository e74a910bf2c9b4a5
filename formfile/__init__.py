from .exceptions import Base64DecodeError, FormFileError, InvalidUploadFileError
from .manager import (
    FileBytes,
    bytes_to_upload_file,
    default_file_naming,
    from_base64,
    response_to_upload_file,
    to_base64,
    to_bytes,
    to_bytes_async,
    to_bytes_list,
    to_bytes_list_async,
    to_file,
    to_file_async,
    to_file_stream_response,
    to_files,
    to_files_async,
    to_files_in_directory,
    to_files_in_directory_async,
)
from .response import FileStreamResponse, Response
from .settings import FormFileSettings, configure, get_settings, reset_settings
from .status import HTTPStatus
from .upload_file import UploadFile

__version__ = "0.1.0"
__all__ = [
    "UploadFile",
    "Response",
    "FileStreamResponse",
    "HTTPStatus",
    "FileBytes",
    "FormFileSettings",
    "configure",
    "get_settings",
    "reset_settings",
    "FormFileError",
    "Base64DecodeError",
    "InvalidUploadFileError",
    "to_bytes",
    "to_bytes_async",
    "to_bytes_list",
    "to_bytes_list_async",
    "to_file",
    "to_file_async",
    "to_files",
    "to_files_async",
    "to_files_in_directory",
    "to_files_in_directory_async",
    "default_file_naming",
    "to_base64",
    "from_base64",
    "to_file_stream_response",
    "response_to_upload_file",
    "bytes_to_upload_file",
]

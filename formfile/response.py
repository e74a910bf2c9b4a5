"""
Response classes for formfile.
"""

from typing import IO, Any, Awaitable, Callable, Dict, List, Optional, Union

from .status import HTTPStatus

Send = Callable[[Dict[str, Any]], Awaitable[None]]

DEFAULT_CHUNK_SIZE = 64 * 1024


class Response:
    """
    Bytes-bodied HTTP response that can be handed to an ASGI server.

    Supports:
    - Custom status codes and headers
    - Method chaining for header setting
    - Conversion to ASGI response format
    - Being awaited directly as an ASGI application
    """

    def __init__(
        self,
        content: bytes = b"",
        status_code: Union[int, HTTPStatus] = HTTPStatus.HTTP_200_OK,
        headers: Optional[Dict[str, str]] = None,
        content_type: Optional[str] = None,
    ):
        """
        Initialize Response object.

        Args:
            content: Response body as bytes
            status_code: HTTP status code (int or HTTPStatus enum)
            headers: Additional response headers
            content_type: Explicit content type (application/octet-stream if not provided)
        """
        self.status_code = int(status_code)
        self.headers = headers or {}
        self.body = content

        if content_type:
            self.headers["content-type"] = content_type
        elif "content-type" not in self.headers:
            self.headers["content-type"] = "application/octet-stream"

    @property
    def content_type(self) -> str:
        return self.headers["content-type"]

    def set_header(self, name: str, value: str) -> "Response":
        """
        Set a response header (supports method chaining).

        Args:
            name: Header name
            value: Header value

        Returns:
            self for method chaining
        """
        self.headers[name] = value
        return self

    def render_body(self) -> bytes:
        return self.body

    def _asgi_headers(self) -> List[List[bytes]]:
        # ASGI format: list of [name, value] byte pairs
        return [
            [name.lower().encode("utf-8"), str(value).encode("utf-8")]
            for name, value in self.headers.items()
        ]

    def to_asgi_response(self) -> Dict[str, Any]:
        """
        Convert to ASGI response format.

        Returns:
            Dictionary with 'status', 'headers', and 'body' keys
        """
        return {
            "status": self.status_code,
            "headers": self._asgi_headers(),
            "body": self.render_body(),
        }

    async def __call__(self, scope: Dict[str, Any], receive: Any, send: Send) -> None:
        await send(
            {
                "type": "http.response.start",
                "status": self.status_code,
                "headers": self._asgi_headers(),
            }
        )
        await send({"type": "http.response.body", "body": self.render_body()})

    def __repr__(self) -> str:
        return f"<Response {self.status_code}>"


def content_disposition(filename: str) -> str:
    """Attachment header value. Quotes, backslashes and line breaks are dropped from the name."""
    safe = "".join(c for c in filename if c not in "\"\\\r\n")
    return f'attachment; filename="{safe}"'


class FileStreamResponse(Response):
    """
    Response whose body is a readable binary stream tagged with a content type.

    The stream is read lazily: either all at once through read_all() /
    to_asgi_response(), or chunk by chunk when the response is awaited as an
    ASGI application. Either way it is read once; a second read yields what is
    left in the stream.
    """

    def __init__(
        self,
        stream: IO[bytes],
        content_type: str,
        filename: Optional[str] = None,
        status_code: Union[int, HTTPStatus] = HTTPStatus.HTTP_200_OK,
        headers: Optional[Dict[str, str]] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        super().__init__(
            b"", status_code=status_code, headers=headers, content_type=content_type
        )
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be greater than 0, got {chunk_size}")

        self.stream = stream
        self.filename = filename
        self.chunk_size = chunk_size

        if filename:
            self.headers["content-disposition"] = content_disposition(filename)

    def read_all(self) -> bytes:
        """Read the remainder of the wrapped stream."""
        return self.stream.read()

    def render_body(self) -> bytes:
        return self.read_all()

    async def __call__(self, scope: Dict[str, Any], receive: Any, send: Send) -> None:
        await send(
            {
                "type": "http.response.start",
                "status": self.status_code,
                "headers": self._asgi_headers(),
            }
        )
        while True:
            chunk = self.stream.read(self.chunk_size)
            if not chunk:
                break
            await send({"type": "http.response.body", "body": chunk, "more_body": True})
        await send({"type": "http.response.body", "body": b"", "more_body": False})

    def __repr__(self) -> str:
        return f"<FileStreamResponse {self.status_code} {self.content_type}>"

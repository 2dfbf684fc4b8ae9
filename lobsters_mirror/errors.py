"""
Failure taxonomy shared by the fetch, decode and write stages.

Every error keeps its underlying cause chained via ``raise ... from exc``
so diagnostics can show the original httpx, pydantic or OS error.
"""


class MirrorError(Exception):
    """Base exception for a failed unit of mirror work."""


class TransportError(MirrorError):
    """Raised when an HTTP request fails or returns a non-2xx status."""

    def __init__(
        self,
        message: str,
        url: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.response_body = response_body


class DecodeError(MirrorError):
    """Raised when a payload is not valid JSON or does not match the schema."""


class WriteError(MirrorError):
    """Raised when a rendered document cannot be written to disk."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path

"""
HTTP transport layer for feed requests.

Provides HTTPClient, a thin async wrapper around httpx that returns raw
response bodies and converts every network or status failure into a
TransportError. Requests are never retried; the caller decides what a
failure means for its unit of work.
"""

import logging
from typing import Any

import httpx

from lobsters_mirror.errors import TransportError

logger = logging.getLogger(__name__)


class HTTPClient:
    """
    Async HTTP client shared by all workers of one run.

    Example:
        async with HTTPClient(timeout=30.0) as client:
            body = await client.get("https://lobste.rs/hottest.json")
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str | None = None,
    ):
        """
        Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds.
            user_agent: Value for the User-Agent header.
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "HTTPClient":
        """Enter async context manager, create client."""
        headers = {"User-Agent": self.user_agent} if self.user_agent else None
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            headers=headers,
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager, close client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, url: str) -> bytes:
        """
        Perform a GET request and return the full response body.

        Args:
            url: Request URL

        Returns:
            Raw response body

        Raises:
            TransportError: On connection, TLS or timeout errors, and on
                any non-2xx status
        """
        if not self._client:
            raise RuntimeError("HTTPClient must be used as async context manager")

        # A malformed URL fails while the request is built, before any I/O
        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise TransportError(
                f"Request to {url} failed: {type(e).__name__}: {e}",
                url=url,
            ) from e

        if not response.is_success:
            raise TransportError(
                f"Request to {url} failed with status {response.status_code}",
                url=url,
                status_code=response.status_code,
                response_body=response.text,
            )

        logger.debug(f"Fetched {len(response.content)} bytes from {url}")
        return response.content

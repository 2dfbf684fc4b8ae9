"""
Feed client: fetch the hottest list and per-story threads, decode to entities.

Decoding failures and transport failures stay distinct (DecodeError vs
TransportError) so the orchestrator can report which stage broke.
"""

from pydantic import TypeAdapter, ValidationError

from lobsters_mirror.errors import DecodeError
from lobsters_mirror.ingestion.http_client import HTTPClient
from lobsters_mirror.ingestion.schemas import Comment, Story, ThreadPayload
from lobsters_mirror.observability.logging import get_logger

logger = get_logger(__name__)

STORIES_PATH = "/hottest.json"

_stories_adapter = TypeAdapter(list[Story])


def normalize_host(host: str) -> str:
    """
    Turn a host name or URL into a base URL without a trailing slash.

    ``lobste.rs`` becomes ``https://lobste.rs``; an explicit scheme is kept.
    """
    host = host.strip()
    if not host:
        raise ValueError("host must not be empty")
    if "://" not in host:
        host = f"https://{host}"
    return host.rstrip("/")


def decode_stories(data: bytes) -> list[Story]:
    """
    Decode the hottest-list payload.

    Raises:
        DecodeError: If the payload is not JSON or any story is malformed
    """
    try:
        return _stories_adapter.validate_json(data)
    except ValidationError as e:
        raise DecodeError(f"Invalid story list: {e}") from e


def decode_thread(data: bytes) -> tuple[str, list[Comment]]:
    """
    Decode a story's thread payload.

    Returns:
        Tuple of (short_id, comments) with comments in source order

    Raises:
        DecodeError: If the payload is not JSON or any comment is malformed
    """
    try:
        payload = ThreadPayload.model_validate_json(data)
    except ValidationError as e:
        raise DecodeError(f"Invalid thread payload: {e}") from e
    return payload.short_id, payload.comments


class FeedClient:
    """
    Fetches and decodes feed resources over a shared HTTPClient.

    Usage:
        async with HTTPClient() as http:
            client = FeedClient(http)
            stories = await client.fetch_stories("https://lobste.rs")
    """

    def __init__(self, http: HTTPClient):
        self._http = http

    async def fetch(self, url: str) -> bytes:
        return await self._http.get(url)

    async def fetch_stories(self, base_url: str) -> list[Story]:
        """Fetch ``<base_url>/hottest.json`` and decode it."""
        url = f"{base_url}{STORIES_PATH}"
        stories = decode_stories(await self.fetch(url))
        logger.info("Fetched story list", url=url, count=len(stories))
        return stories

    async def fetch_thread(self, story: Story) -> tuple[str, list[Comment]]:
        """Fetch ``<permalink>.json`` for a story and decode it."""
        url = f"{story.short_id_url}.json"
        short_id, comments = decode_thread(await self.fetch(url))
        logger.debug(
            "Fetched thread",
            short_id=short_id,
            comments=len(comments),
            advertised=story.comment_count,
        )
        return short_id, comments

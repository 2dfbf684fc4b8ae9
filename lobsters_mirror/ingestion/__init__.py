"""Feed ingestion - entity schemas, HTTP transport and decoding."""

from lobsters_mirror.ingestion.feed_client import (
    FeedClient,
    decode_stories,
    decode_thread,
    normalize_host,
)
from lobsters_mirror.ingestion.http_client import HTTPClient
from lobsters_mirror.ingestion.schemas import Comment, Story, ThreadPayload

__all__ = [
    "Comment",
    "FeedClient",
    "HTTPClient",
    "Story",
    "ThreadPayload",
    "decode_stories",
    "decode_thread",
    "normalize_host",
]

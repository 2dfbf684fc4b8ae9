"""
Text cleanup helpers shared by every dialect.

Provides:
- transliterate: Unicode -> plain ASCII approximation (Unidecode)
- clean_comment: HTML comment body -> plain ASCII text without tags
- wrap_text: paragraph-preserving word wrap
- format_timestamp: ISO-8601 -> ``Mon Jan  1 12:00:00 2024`` with fallback
- link_target: where a story line should point
"""

import html
import re
import textwrap
from datetime import datetime, timezone

from unidecode import unidecode

from lobsters_mirror.ingestion.schemas import Story

WRAP_WIDTH = 60

# DOTALL so no "<...>" pair survives, even across line breaks
TAG_PATTERN = re.compile(r"<.*?>", re.DOTALL)


def transliterate(text: str) -> str:
    """Approximate text in plain ASCII (``—`` becomes ``--``)."""
    return unidecode(text)


def strip_tags(text: str) -> str:
    """Remove HTML-like ``<...>`` sequences."""
    return TAG_PATTERN.sub("", text)


def clean_comment(body: str) -> str:
    """
    Convert an HTML comment body to plain ASCII text.

    Entities are decoded and the result transliterated before tags are
    stripped, so neither step can reintroduce a ``<...>`` sequence.
    """
    return strip_tags(transliterate(html.unescape(body))).strip()


def wrap_text(text: str, width: int = WRAP_WIDTH) -> str:
    """
    Word-wrap each line of text to ``width`` columns.

    Line breaks already in the text are kept as paragraph breaks.
    """
    lines = [
        textwrap.fill(line, width=width, break_on_hyphens=False) if line.strip() else ""
        for line in text.splitlines()
    ]
    return "\n".join(lines).strip("\n")


def parse_timestamp(value: str) -> datetime | None:
    """
    Parse an ISO-8601 timestamp to UTC, or None if it is not one.

    Values whose UTC equivalent falls outside the datetime range (e.g.
    ``0001-01-01T00:00:00+01:00``) are treated as unparsable.
    """
    try:
        return as_utc(datetime.fromisoformat(value.strip()))
    except (ValueError, OverflowError):
        return None


def as_utc(value: datetime) -> datetime:
    """Convert to UTC, treating naive datetimes as already UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_datetime(value: datetime) -> str:
    """Format like ``date``: ``Mon Jan  1 12:00:00 2024`` (day space-padded)."""
    value = as_utc(value)
    return f"{value:%a %b} {value.day:>2} {value:%H:%M:%S %Y}"


def format_timestamp(value: str, now: datetime) -> str:
    """
    Format a feed timestamp for display.

    Args:
        value: ISO-8601 timestamp from the feed
        now: Fallback used when ``value`` does not parse

    Returns:
        Formatted UTC timestamp
    """
    parsed = parse_timestamp(value)
    return format_datetime(now if parsed is None else parsed)


def link_target(story: Story) -> str:
    """
    Choose the link for a story line.

    Self-posts link to their permalink. External links are used as-is,
    except a leading ``https`` becomes ``http`` since Gopher and Gemini
    clients rarely speak TLS to the web.
    """
    if story.is_self_post:
        return story.short_id_url
    if story.url.startswith("https"):
        return "http" + story.url[len("https"):]
    return story.url

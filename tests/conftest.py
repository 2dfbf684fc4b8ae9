"""Pytest fixtures for lobsters-mirror tests."""

import json
from datetime import datetime, timezone
from typing import Any

import pytest

from lobsters_mirror.config.settings import get_settings
from lobsters_mirror.ingestion.schemas import Comment, Story

BASE_URL = "https://lobste.rs"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings fresh from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fixed_now() -> datetime:
    """Injected current time for deterministic rendering."""
    return datetime(2024, 3, 5, 8, 9, 10, tzinfo=timezone.utc)


def story_payload(short_id: str = "abc1", **overrides: Any) -> dict[str, Any]:
    """Build one story object as the hottest endpoint returns it."""
    payload = {
        "short_id": short_id,
        "short_id_url": f"{BASE_URL}/s/{short_id}",
        "created_at": "2024-03-04T10:20:30.000-06:00",
        "title": f"Story {short_id}",
        "url": f"https://example.com/{short_id}",
        "score": 12,
        "flags": 0,
        "comment_count": 2,
        "description": "",
        "comments_url": f"{BASE_URL}/s/{short_id}/story",
        "submitter_user": {"username": "alice", "karma": 100},
        "tags": ["programming", "python"],
    }
    payload.update(overrides)
    return payload


def comment_payload(depth: int = 0, **overrides: Any) -> dict[str, Any]:
    """Build one comment object as the thread endpoint returns it."""
    payload = {
        "short_id": f"c{depth}",
        "comment": "<p>Nice write-up &amp; thanks.</p>",
        "created_at": "2024-03-04T11:00:00.000-06:00",
        "score": 3,
        "flags": 0,
        "depth": depth,
        "commenting_user": {"username": "bob"},
    }
    payload.update(overrides)
    return payload


def thread_payload(short_id: str = "abc1", comments: list[dict] | None = None) -> dict[str, Any]:
    """Build a thread payload for a story."""
    if comments is None:
        comments = [comment_payload(0), comment_payload(1, commenting_user={"username": "carol"})]
    return {"short_id": short_id, "title": f"Story {short_id}", "comments": comments}


def to_json(payload: Any) -> bytes:
    return json.dumps(payload).encode("utf-8")


@pytest.fixture
def sample_story() -> Story:
    """A story with an external https link."""
    return Story.model_validate(story_payload("abc1"))


@pytest.fixture
def self_post() -> Story:
    """A story without an external link (text post)."""
    return Story.model_validate(
        story_payload("self1", title="Ask: what are you reading?", url="")
    )


@pytest.fixture
def sample_comments() -> list[Comment]:
    """A small thread covering several depths."""
    return [
        Comment.model_validate(comment_payload(0)),
        Comment.model_validate(
            comment_payload(1, comment="<p>Agreed, <em>very</em> clear.</p>", commenting_user="carol")
        ),
        Comment.model_validate(comment_payload(2, score=-1)),
        Comment.model_validate(comment_payload(7, comment="Deep reply")),
    ]

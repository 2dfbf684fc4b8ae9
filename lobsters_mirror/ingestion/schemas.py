"""
Entity schemas for the aggregator feed.

Field names follow the feed's JSON keys. Decoding is strict: a missing
field or a value of the wrong JSON type rejects the whole payload, and
unknown keys are ignored.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _unwrap_username(value: Any) -> Any:
    """Accept both ``{"username": "x"}`` and bare ``"x"`` user fields."""
    if isinstance(value, dict) and "username" in value:
        return value["username"]
    return value


class FeedModel(BaseModel):
    """Immutable, strictly-typed base for feed records."""

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")


class Story(FeedModel):
    """A single submitted link or text post from the hottest list."""

    title: str
    created_at: str = Field(..., description="ISO-8601 creation timestamp")
    score: int
    comment_count: int = Field(
        ...,
        ge=0,
        description="Advisory count from the list endpoint; not reconciled with the thread",
    )
    short_id: str = Field(..., min_length=1, description="Per-story key and filename stem")
    short_id_url: str = Field(..., description="Permalink to the story's discussion page")
    url: str = Field(..., description="External link; empty for self-posts")
    tags: list[str]
    submitter_user: str

    @field_validator("submitter_user", mode="before")
    @classmethod
    def unwrap_submitter(cls, value: Any) -> Any:
        return _unwrap_username(value)

    @property
    def is_self_post(self) -> bool:
        return not self.url


class Comment(FeedModel):
    """One comment in a thread; ``depth`` encodes its place in the reply tree."""

    comment: str = Field(..., description="Comment body, may contain HTML")
    created_at: str
    score: int
    depth: int = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("depth", "indent_level"),
        description="Nesting level, 0 for top-level comments",
    )
    commenting_user: str

    @field_validator("commenting_user", mode="before")
    @classmethod
    def unwrap_commenter(cls, value: Any) -> Any:
        return _unwrap_username(value)


class ThreadPayload(FeedModel):
    """Body of ``<permalink>.json``: the story id and its flattened comments."""

    short_id: str
    comments: list[Comment]

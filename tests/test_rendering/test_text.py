"""Tests for text cleanup helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from lobsters_mirror.ingestion.schemas import Story
from lobsters_mirror.rendering.text import (
    TAG_PATTERN,
    WRAP_WIDTH,
    clean_comment,
    format_datetime,
    format_timestamp,
    link_target,
    parse_timestamp,
    strip_tags,
    transliterate,
    wrap_text,
)
from tests.conftest import story_payload


class TestTransliterate:
    """Tests for transliterate()."""

    def test_em_dash(self):
        assert transliterate("Hello — World") == "Hello -- World"

    def test_accents(self):
        assert transliterate("Café déjà vu") == "Cafe deja vu"

    def test_ascii_unchanged(self):
        assert transliterate("plain [text] 123") == "plain [text] 123"


class TestCleanComment:
    """Tests for clean_comment() and strip_tags()."""

    def test_strips_tags(self):
        assert strip_tags("<p>Hello <a href=\"x\">there</a></p>") == "Hello there"

    def test_decodes_entities(self):
        assert clean_comment("<p>Tom &amp; Jerry&#39;s</p>") == "Tom & Jerry's"

    def test_escaped_markup_does_not_survive(self):
        """Entities decoding to tags are stripped too."""
        assert clean_comment("&lt;script&gt;alert(1)&lt;/script&gt;") == "alert(1)"

    @pytest.mark.parametrize(
        "body",
        [
            "<p>one</p>\n<p>two</p>",
            "« guillemets »",
            "<<nested>>",
            "a <b\nmultiline> tag",
            "&lt;em&gt;escaped&lt;/em&gt;",
            "x < y and y > z",
        ],
    )
    def test_no_tag_sequences_remain(self, body):
        assert TAG_PATTERN.search(clean_comment(body)) is None

    def test_keeps_paragraph_breaks(self):
        assert clean_comment("<p>one</p>\n<p>two</p>") == "one\ntwo"


class TestWrapText:
    """Tests for wrap_text()."""

    def test_wraps_to_width(self):
        text = " ".join(["word"] * 60)

        lines = wrap_text(text).splitlines()

        assert len(lines) > 1
        assert all(len(line) <= WRAP_WIDTH for line in lines)

    def test_preserves_line_breaks(self):
        assert wrap_text("first\nsecond") == "first\nsecond"

    def test_short_text_unchanged(self):
        assert wrap_text("short") == "short"


class TestTimestamps:
    """Tests for timestamp parsing and formatting."""

    def test_offset_converted_to_utc(self):
        parsed = parse_timestamp("2024-03-04T10:20:30.000-06:00")
        assert parsed == datetime(2024, 3, 4, 16, 20, 30, tzinfo=timezone.utc)

    def test_naive_treated_as_utc(self):
        parsed = parse_timestamp("2024-01-09T00:00:00")
        assert parsed.tzinfo == timezone.utc

    def test_unparsable_returns_none(self):
        assert parse_timestamp("yesterday") is None

    def test_format_space_pads_day(self):
        value = datetime(2024, 1, 9, 0, 0, 0, tzinfo=timezone.utc)
        assert format_datetime(value) == "Tue Jan  9 00:00:00 2024"

    def test_format_two_digit_day(self):
        value = datetime(2024, 3, 15, 23, 5, 1, tzinfo=timezone.utc)
        assert format_datetime(value) == "Fri Mar 15 23:05:01 2024"

    def test_format_timestamp_parses(self, fixed_now):
        assert format_timestamp("2024-01-09T00:00:00Z", fixed_now) == "Tue Jan  9 00:00:00 2024"

    @pytest.mark.parametrize("value", ["", "not a date", "2024-13-45T99:00:00"])
    def test_malformed_falls_back_to_now(self, value, fixed_now):
        assert format_timestamp(value, fixed_now) == "Tue Mar  5 08:09:10 2024"

    @pytest.mark.parametrize(
        "value", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:00:00-05:00"]
    )
    def test_out_of_range_utc_returns_none(self, value):
        assert parse_timestamp(value) is None

    @pytest.mark.parametrize(
        "value", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:00:00-05:00"]
    )
    def test_out_of_range_falls_back_to_now(self, value, fixed_now):
        assert format_timestamp(value, fixed_now) == "Tue Mar  5 08:09:10 2024"

    def test_now_converted_to_utc(self):
        now = datetime(2024, 3, 5, 2, 9, 10, tzinfo=timezone(timedelta(hours=-6)))
        assert format_timestamp("bad", now) == "Tue Mar  5 08:09:10 2024"


class TestLinkTarget:
    """Tests for link_target()."""

    def _story(self, url: str) -> Story:
        return Story.model_validate(story_payload("abc1", url=url))

    def test_self_post_uses_permalink(self):
        assert link_target(self._story("")) == "https://lobste.rs/s/abc1"

    def test_https_rewritten_to_http(self):
        assert link_target(self._story("https://example.com/https/page")) == "http://example.com/https/page"

    @pytest.mark.parametrize(
        "url",
        ["http://example.com/a", "gopher://example.org/1/", "ftp://files.example"],
    )
    def test_other_urls_unchanged(self, url):
        assert link_target(self._story(url)) == url

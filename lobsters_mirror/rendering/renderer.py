"""
Document renderer for index and thread documents.

Rendering is pure: the only time input is the ``now`` argument, so the
same stories, comments and ``now`` always produce identical text.
"""

import textwrap
from collections.abc import Sequence
from datetime import datetime

from lobsters_mirror.ingestion.schemas import Comment, Story
from lobsters_mirror.rendering.dialects import Dialect, DialectConfig, get_dialect
from lobsters_mirror.rendering.text import (
    clean_comment,
    format_datetime,
    format_timestamp,
    link_target,
    transliterate,
    wrap_text,
)

# Indentation per comment depth; deeper comments reuse the last entry.
INDENT_STYLES: tuple[str, ...] = ("", "\t", "\t\t", "\t\t\t")


def indent_for_depth(depth: int) -> str:
    """Return the indentation prefix for a comment depth, clamped."""
    return INDENT_STYLES[min(max(depth, 0), len(INDENT_STYLES) - 1)]


def _indented(text: str, depth: int) -> str:
    return textwrap.indent(wrap_text(text), indent_for_depth(depth))


class DocumentRenderer:
    """
    Renders stories and threads in one dialect.

    Usage:
        renderer = DocumentRenderer(Dialect.GEMINI, site="lobste.rs")
        index = renderer.render_index(stories, now)
        thread = renderer.render_thread(story, comments, now)
    """

    def __init__(self, dialect: Dialect | str | DialectConfig, site: str = "Lobste.rs"):
        self.config = dialect if isinstance(dialect, DialectConfig) else get_dialect(dialect)
        self.site = site

    @property
    def dialect(self) -> Dialect:
        return self.config.dialect

    @property
    def index_filename(self) -> str:
        return self.config.index_filename

    def thread_filename(self, story: Story) -> str:
        return self.config.thread_filename(story.short_id)

    def render_index(self, stories: Sequence[Story], now: datetime) -> str:
        """
        Render the index document listing every story.

        Args:
            stories: Stories in feed order
            now: Time stamped in the header and used for unparsable dates

        Returns:
            Complete document text ending with a newline
        """
        cfg = self.config
        lines = self._header(
            f"This is an unofficial {self.site} mirror on {cfg.protocol}.",
            f"You can find the {len(stories)} hottest stories and their comments.",
            "",
            f"Last updated {format_datetime(now)}",
        )

        for story in stories:
            target = link_target(story)
            lines.append(
                cfg.story_line.format(
                    target=target,
                    score=story.score,
                    title=transliterate(story.title),
                )
            )
            if cfg.url_suffix_line is not None and not story.is_self_post:
                lines.append(cfg.url_suffix_line.format(url=target))
            lines.append(
                cfg.meta_line.format(
                    date=format_timestamp(story.created_at, now),
                    user=story.submitter_user,
                    tags=", ".join(story.tags),
                )
            )
            lines.append(
                cfg.comments_line.format(
                    filename=self.thread_filename(story),
                    count=story.comment_count,
                )
            )
            lines.append("")

        if cfg.end_marker is not None:
            lines.append(cfg.end_marker)
        return "\n".join(lines) + "\n"

    def render_thread(
        self,
        story: Story,
        comments: Sequence[Comment],
        now: datetime,
    ) -> str:
        """
        Render one story's discussion thread.

        Comment bodies are cleaned, wrapped to 60 columns and indented by
        depth. The advertised comment_count is ignored; every comment
        passed in is rendered, in order.
        """
        cfg = self.config
        lines = self._header(
            f'Viewing comments for "{transliterate(story.title)}"',
            "---",
        )

        for comment in comments:
            meta = cfg.comment_meta_line.format(
                user=comment.commenting_user,
                date=format_timestamp(comment.created_at, now),
                score=comment.score,
            )
            lines.append(_indented(meta, comment.depth))
            body = clean_comment(comment.comment)
            if body:
                lines.append(_indented(body, comment.depth))
            lines.append("")

        return "\n".join(lines) + "\n"

    def _header(self, *text: str) -> list[str]:
        return ["", *self.config.banner_lines(), "", *text, ""]

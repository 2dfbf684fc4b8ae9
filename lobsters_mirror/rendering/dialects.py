"""
Output dialects and their line templates.

Each dialect is a DialectConfig; the renderer is driven entirely by
these templates, so adding a dialect means adding one entry to DIALECTS.
"""

from dataclasses import dataclass
from enum import Enum


class Dialect(str, Enum):
    """Supported output document styles."""

    GEMINI = "gemini"
    GOPHER = "gopher"


BANNER = (
    " .----------------.",
    "| .--------------. |",
    "| |   _____      | |",
    "| |  |_   _|     | |",
    "| |    | |       | |",
    "| |    | |   _   | |",
    "| |   _| |__/ |  | |",
    "| |  |________|  | |",
    "| |              | |",
    "| '--------------' |",
    " '----------------'",
)


@dataclass(frozen=True)
class DialectConfig:
    """
    Line formats and file naming for one dialect.

    Template fields:
        story_line: target, score, title
        url_suffix_line: url (None to never emit a separate URL line)
        meta_line: date, user, tags
        comments_line: filename, count
        comment_meta_line: user, date, score
    """

    dialect: Dialect
    protocol: str
    index_filename: str
    thread_extension: str
    story_line: str
    meta_line: str
    comments_line: str
    comment_meta_line: str
    url_suffix_line: str | None = None
    banner_fence: str | None = None
    end_marker: str | None = None

    def banner_lines(self) -> list[str]:
        if self.banner_fence is None:
            return list(BANNER)
        return [self.banner_fence, *BANNER, self.banner_fence]

    def thread_filename(self, short_id: str) -> str:
        return f"{short_id}{self.thread_extension}"


GEMINI = DialectConfig(
    dialect=Dialect.GEMINI,
    protocol="gemini",
    index_filename="index.gmi",
    thread_extension=".gmi",
    story_line="=> {target} [{score}] - {title}",
    meta_line="> Submitted {date} by {user} | {tags}",
    comments_line="=> {filename} View comments ({count})",
    comment_meta_line="> {user} commented on {date} [{score}]:",
    banner_fence="```",
)

# Gophermap: tab-less lines are info text, "h" entries with a URL:
# selector point off-site, "0" entries are text files in this directory.
GOPHER = DialectConfig(
    dialect=Dialect.GOPHER,
    protocol="gopher",
    index_filename="gophermap",
    thread_extension=".txt",
    story_line="h[{score}] - {title}\tURL:{target}",
    url_suffix_line="{url}",
    meta_line="Submitted {date} by {user} | {tags}",
    comments_line="0View comments ({count})\t{filename}",
    comment_meta_line="{user} commented on {date} [{score}]:",
    end_marker=".",
)

DIALECTS: dict[Dialect, DialectConfig] = {
    Dialect.GEMINI: GEMINI,
    Dialect.GOPHER: GOPHER,
}


def get_dialect(dialect: Dialect | str) -> DialectConfig:
    """Look up a dialect config by enum or name (e.g., "gopher")."""
    try:
        return DIALECTS[Dialect(dialect)]
    except ValueError:
        raise ValueError(f"Unknown dialect: {dialect!r}") from None

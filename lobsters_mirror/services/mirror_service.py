"""
Mirror service - one fetch-and-render run over the feed.

Run phases:
1. Fetch and decode the hottest list (fatal on failure)
2. Render and write the index for every dialect (fatal on failure)
3. Fan out one fetch+render+write unit per story over a bounded pool

Per-story failures are logged with the story's title and collected in
the SyncResult; they never cancel other stories.
"""

import asyncio
import time
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from urllib.parse import urlsplit

from lobsters_mirror.config.settings import get_settings
from lobsters_mirror.errors import MirrorError
from lobsters_mirror.ingestion.feed_client import FeedClient, normalize_host
from lobsters_mirror.ingestion.http_client import HTTPClient
from lobsters_mirror.ingestion.schemas import Story
from lobsters_mirror.observability.logging import get_logger
from lobsters_mirror.rendering.dialects import Dialect
from lobsters_mirror.rendering.renderer import DocumentRenderer
from lobsters_mirror.storage.writer import DocumentWriter

logger = get_logger(__name__)


@dataclass
class StoryOutcome:
    """Result of one story's thread unit."""

    short_id: str
    title: str
    paths: list[Path] = field(default_factory=list)
    error: MirrorError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SyncResult:
    """Aggregated report of a completed run."""

    index_paths: list[Path]
    outcomes: list[StoryOutcome]
    elapsed_seconds: float = 0.0

    @property
    def succeeded(self) -> list[StoryOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[StoryOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def succeeded_ids(self) -> list[str]:
        return [o.short_id for o in self.succeeded]

    @property
    def failed_ids(self) -> list[str]:
        return [o.short_id for o in self.failed]

    @property
    def failures(self) -> dict[str, str]:
        """Failed short_id -> error message."""
        return {o.short_id: str(o.error) for o in self.failed}

    @property
    def ok(self) -> bool:
        return not self.failed


class MirrorService:
    """
    Orchestrates a single mirror run.

    Usage:
        service = MirrorService(host="lobste.rs", output_dir="/srv/gopher")
        result = await service.run(now=datetime.now(timezone.utc))
    """

    def __init__(
        self,
        host: str | None = None,
        output_dir: str | Path | None = None,
        dialects: Sequence[Dialect | str] | None = None,
        worker_count: int | None = None,
        feed_client: FeedClient | None = None,
        writer: DocumentWriter | None = None,
    ):
        """
        Initialize the mirror service.

        Args:
            host: Source host or base URL (defaults to settings)
            output_dir: Directory for rendered documents (defaults to settings)
            dialects: Dialects to render (defaults to settings)
            worker_count: Maximum concurrent thread units (defaults to settings)
            feed_client: Pre-built feed client; one is created per run if None
            writer: Document writer (or create for output_dir)
        """
        settings = get_settings()

        self.base_url = normalize_host(host or settings.host)
        self.worker_count = settings.worker_count if worker_count is None else worker_count
        if self.worker_count < 1:
            raise ValueError("worker_count must be at least 1")

        self._http_timeout = settings.http_timeout_seconds
        self._user_agent = settings.user_agent
        self._feed_client = feed_client
        self._writer = writer or DocumentWriter(output_dir or settings.output_dir)

        site = urlsplit(self.base_url).netloc or self.base_url
        self._renderers = [
            DocumentRenderer(dialect, site=site)
            for dialect in (dialects or settings.dialects)
        ]
        if not self._renderers:
            raise ValueError("At least one dialect is required")

        logger.info(
            "Mirror service initialized",
            base_url=self.base_url,
            dialects=[r.dialect.value for r in self._renderers],
            workers=self.worker_count,
        )

    async def run(self, now: datetime) -> SyncResult:
        """
        Run one full sync.

        Args:
            now: Timestamp for index headers and unparsable dates

        Returns:
            SyncResult with every story's outcome

        Raises:
            MirrorError: If the story list or an index cannot be produced
        """
        if self._feed_client is not None:
            return await self._run(self._feed_client, now)

        async with HTTPClient(
            timeout=self._http_timeout,
            user_agent=self._user_agent,
        ) as http:
            return await self._run(FeedClient(http), now)

    async def _run(self, client: FeedClient, now: datetime) -> SyncResult:
        start_time = time.monotonic()

        stories = await client.fetch_stories(self.base_url)
        self._warn_duplicate_ids(stories)
        index_paths = self._write_indexes(stories, now)

        semaphore = asyncio.Semaphore(self.worker_count)
        outcomes = await asyncio.gather(
            *(self._sync_story(client, story, now, semaphore) for story in stories)
        )

        result = SyncResult(
            index_paths=index_paths,
            outcomes=list(outcomes),
            elapsed_seconds=time.monotonic() - start_time,
        )
        logger.info(
            "Mirror run completed",
            stories=len(stories),
            succeeded=len(result.succeeded),
            failed=len(result.failed),
            elapsed=f"{result.elapsed_seconds:.2f}s",
        )
        return result

    def _write_indexes(self, stories: list[Story], now: datetime) -> list[Path]:
        # Render every dialect before writing any, so a render bug
        # leaves no index behind.
        documents = [
            (renderer.index_filename, renderer.render_index(stories, now))
            for renderer in self._renderers
        ]
        paths = [self._writer.write(name, text) for name, text in documents]
        logger.info("Index written", paths=[str(p) for p in paths])
        return paths

    async def _sync_story(
        self,
        client: FeedClient,
        story: Story,
        now: datetime,
        semaphore: asyncio.Semaphore,
    ) -> StoryOutcome:
        """Fetch, render and write one thread; failures are contained here."""
        async with semaphore:
            try:
                _, comments = await client.fetch_thread(story)
                paths = [
                    self._writer.write(
                        renderer.thread_filename(story),
                        renderer.render_thread(story, comments, now),
                    )
                    for renderer in self._renderers
                ]
            except MirrorError as e:
                logger.error(
                    "Thread sync failed",
                    title=story.title,
                    short_id=story.short_id,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                return StoryOutcome(short_id=story.short_id, title=story.title, error=e)

        logger.debug("Thread written", short_id=story.short_id, comments=len(comments))
        return StoryOutcome(short_id=story.short_id, title=story.title, paths=paths)

    @staticmethod
    def _warn_duplicate_ids(stories: list[Story]) -> None:
        duplicates = [
            short_id
            for short_id, count in Counter(s.short_id for s in stories).items()
            if count > 1
        ]
        if duplicates:
            logger.warning(
                "Duplicate short_ids; later threads overwrite earlier ones",
                short_ids=duplicates,
            )

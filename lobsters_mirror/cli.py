"""
Command-line interface for lobsters-mirror.

Usage:
    lobsters-mirror sync                      # Mirror lobste.rs into ./
    lobsters-mirror sync --host example.org   # Mirror another instance
    lobsters-mirror --debug sync --dialect gopher --output-dir /srv/gopher

Exit codes:
    0  every story was mirrored
    1  the story list or index could not be produced
    3  the run completed but at least one thread failed
"""

import asyncio
import os
import sys
from datetime import datetime, timezone

import click

from lobsters_mirror.config.settings import get_settings
from lobsters_mirror.errors import MirrorError
from lobsters_mirror.observability.logging import run_context, setup_logging
from lobsters_mirror.rendering.dialects import Dialect

EXIT_FATAL = 1
EXIT_PARTIAL = 3


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """Lobsters Mirror - render a link aggregator feed for Gopher and Gemini."""
    if debug:
        os.environ["MIRROR_LOG_LEVEL"] = "DEBUG"
        get_settings.cache_clear()

    setup_logging()


@main.command()
@click.option("--host", default=None, help="Source host, e.g. lobste.rs (https assumed)")
@click.option(
    "--dialect",
    type=click.Choice([d.value for d in Dialect] + ["all"]),
    default=None,
    help="Output dialect (default from settings: all)",
)
@click.option("--output-dir", type=click.Path(file_okay=False), default=None, help="Directory for documents")
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Concurrent thread fetches")
def sync(
    host: str | None,
    dialect: str | None,
    output_dir: str | None,
    workers: int | None,
) -> None:
    """Fetch the hottest stories and write index and thread documents."""
    from lobsters_mirror.services.mirror_service import MirrorService

    settings = get_settings()
    if dialect == "all":
        dialects = [d.value for d in Dialect]
    else:
        dialects = [dialect] if dialect else None

    service = MirrorService(
        host=host,
        output_dir=output_dir,
        dialects=dialects,
        worker_count=workers,
    )

    try:
        with run_context(host=service.base_url):
            result = asyncio.run(service.run(now=datetime.now(timezone.utc)))
    except MirrorError as e:
        click.echo(click.style(f"Mirror failed: {e}", fg="red"), err=True)
        sys.exit(EXIT_FATAL)

    click.echo(f"\nMirrored {service.base_url} into {output_dir or settings.output_dir}")
    for path in result.index_paths:
        click.echo(f"  index: {path}")
    click.echo(f"  threads succeeded: {len(result.succeeded)}")
    click.echo(f"  threads failed: {len(result.failed)}")

    if not result.ok:
        for outcome in result.failed:
            click.echo(
                click.style(f"  ✗ {outcome.short_id} ({outcome.title}): {outcome.error}", fg="red"),
                err=True,
            )
        click.echo(click.style("Sync completed with errors", fg="yellow"))
        sys.exit(EXIT_PARTIAL)

    click.echo(click.style("Sync completed", fg="green"))


if __name__ == "__main__":
    main()

"""
Structured logging for mirror runs.

Events are keyword-tagged (short_id, title, dialect) and rendered as JSON
in production or as console lines otherwise. Everything goes to stderr;
stdout is reserved for the CLI's completion notice.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from structlog.types import Processor

from lobsters_mirror.config.settings import get_settings

# Libraries whose per-request chatter would drown out per-story events
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


def _renderer(production: bool) -> list[Processor]:
    if production:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def setup_logging(level: str | None = None) -> None:
    """
    Configure structlog and the stdlib root handler.

    Args:
        level: Log level name; defaults to the configured ``log_level``

    Usage:
        setup_logging()
        logger = get_logger(__name__)
        logger.info("Thread written", short_id="abc123", dialect="gemini")
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            *_renderer(settings.is_production),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # The stdlib handler locks per record, so concurrent story tasks
    # never interleave lines.
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=getattr(logging, level))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)


def bind_context(**kwargs) -> None:
    """Tag all subsequent log events in this context (e.g. ``host=``)."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop every bound context variable."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def run_context(**kwargs) -> Iterator[None]:
    """
    Bind context for the duration of one run, then clear it.

    Usage:
        with run_context(host="https://lobste.rs"):
            asyncio.run(service.run(now))
    """
    bind_context(**kwargs)
    try:
        yield
    finally:
        clear_context()

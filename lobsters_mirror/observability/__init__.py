"""Observability layer - structured logging."""

from lobsters_mirror.observability.logging import (
    bind_context,
    clear_context,
    get_logger,
    run_context,
    setup_logging,
)

__all__ = ["setup_logging", "get_logger", "bind_context", "clear_context", "run_context"]

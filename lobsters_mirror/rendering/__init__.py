"""Rendering - dialect templates, text cleanup and document renderer."""

from lobsters_mirror.rendering.dialects import (
    DIALECTS,
    Dialect,
    DialectConfig,
    get_dialect,
)
from lobsters_mirror.rendering.renderer import (
    INDENT_STYLES,
    DocumentRenderer,
    indent_for_depth,
)

__all__ = [
    "DIALECTS",
    "Dialect",
    "DialectConfig",
    "DocumentRenderer",
    "INDENT_STYLES",
    "get_dialect",
    "indent_for_depth",
]

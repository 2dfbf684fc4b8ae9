"""Storage - flat-file document output."""

from lobsters_mirror.storage.writer import DocumentWriter

__all__ = ["DocumentWriter"]

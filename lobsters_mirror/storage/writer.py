"""Flat-file output for rendered documents."""

import logging
from pathlib import Path

from lobsters_mirror.errors import WriteError

logger = logging.getLogger(__name__)


class DocumentWriter:
    """
    Writes rendered documents into one output directory.

    Existing files are overwritten unconditionally. Two stories sharing a
    short_id therefore leave only the last-written thread on disk.
    """

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)

    def path_for(self, name: str) -> Path:
        return self.output_dir / name

    def write(self, name: str, content: str) -> Path:
        """
        Write a document, creating the output directory if needed.

        Args:
            name: File name inside the output directory
            content: Document text

        Returns:
            Path of the written file

        Raises:
            WriteError: If the directory or file cannot be written, or if
                name is not a plain file name inside the output directory
        """
        path = self.path_for(name)
        if name in ("", ".", "..") or Path(name).name != name:
            raise WriteError(
                f"Refusing to write {name!r} outside {self.output_dir}",
                path=str(path),
            )

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise WriteError(f"Failed to write {path}: {e}", path=str(path)) from e

        logger.debug(f"Wrote {len(content)} chars to {path}")
        return path

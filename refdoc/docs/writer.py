"""Writes rendered pages below an output directory."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from refdoc.core.exceptions import RefdocError

logger = logging.getLogger(__name__)


class PageWriter:
    """Writes pages keyed by their path relative to ``output``."""

    def __init__(self, output: Path) -> None:
        self.output = output

    def write(self, relative_path: str, content: str) -> Path:
        target = self.output / relative_path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            raise RefdocError(f"Cannot write {target}: {e}") from e
        logger.debug("Wrote %s", target)
        return target

    def write_all(self, pages: Mapping[str, str]) -> int:
        """Write every page, returning how many were written."""
        for relative_path, content in pages.items():
            self.write(relative_path, content)
        return len(pages)

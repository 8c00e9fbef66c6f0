"""JSON manifest source.

A manifest lists symbols that were extracted elsewhere::

    {"symbols": [{"name": "App\\\\User", "kind": "class", "imports": "use ...;"}]}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from refdoc.core.exceptions import SourceError
from refdoc.sources.models import SourceSymbol

logger = logging.getLogger(__name__)


class ManifestSource:
    """Symbol source backed by a JSON manifest file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.errors: list[str] = []
        self.skipped = 0

    def symbols(self) -> list[SourceSymbol]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise SourceError(f"Cannot read manifest {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise SourceError(f"Invalid manifest {self.path}: {e}") from e

        entries = data.get("symbols") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise SourceError(f"Invalid manifest {self.path}: expected a 'symbols' list")

        result = []
        for i, entry in enumerate(entries):
            try:
                result.append(SourceSymbol.from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                raise SourceError(f"Invalid manifest entry #{i} in {self.path}: {e}") from e

        logger.debug("Loaded %d symbols from %s", len(result), self.path)
        return result

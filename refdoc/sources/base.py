"""Protocol for symbol sources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from refdoc.sources.models import SourceSymbol


class SymbolSource(Protocol):
    """Anything that can hand over the symbols of a project."""

    errors: list[str]
    skipped: int

    def symbols(self) -> list[SourceSymbol]:
        """Return every discovered symbol."""
        ...

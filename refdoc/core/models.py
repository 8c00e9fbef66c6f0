"""Data models for Refdoc."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from refdoc.core import names


class SymbolKind(Enum):
    """Kinds of documented symbols."""

    CLASS = "class"
    INTERFACE = "interface"
    TRAIT = "trait"
    FUNCTION = "function"
    METHOD = "method"

    @property
    def is_class_like(self) -> bool:
        return self in (SymbolKind.CLASS, SymbolKind.INTERFACE, SymbolKind.TRAIT)


@dataclass(frozen=True)
class Symbol:
    """A documented unit, keyed by its fully-qualified name."""

    name: str
    kind: SymbolKind

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", names.normalize(self.name))

    @property
    def namespace(self) -> str:
        return names.namespace_of(self.name)

    @property
    def basename(self) -> str:
        return names.basename(self.name)


class BuildStats:
    """Statistics from a build."""

    def __init__(self) -> None:
        self.symbols: int = 0
        self.pages: int = 0
        self.skipped: int = 0
        self.ignored: int = 0
        self.references: int = 0
        self.unresolved: int = 0
        self.errors: list[str] = []

    def as_dict(self) -> dict[str, object]:
        return {
            "symbols": self.symbols,
            "pages": self.pages,
            "skipped": self.skipped,
            "ignored": self.ignored,
            "references": self.references,
            "unresolved": self.unresolved,
            "errors": list(self.errors),
        }

    def __repr__(self) -> str:
        return (
            f"BuildStats(symbols={self.symbols}, pages={self.pages}, "
            f"skipped={self.skipped}, ignored={self.ignored}, "
            f"references={self.references}, unresolved={self.unresolved}, "
            f"errors={len(self.errors)})"
        )

"""Reference graph: known symbols, their titles and who references whom."""

from __future__ import annotations

from refdoc.core import names
from refdoc.core.graph.linking import link_path
from refdoc.core.models import Symbol


class ReferenceGraph:
    """Registry of documented symbols plus reference edges between them.

    Populated in two steps: every symbol is registered first, references are
    added while documents are assembled. A name that was never registered is
    unknown and never linked.
    """

    __slots__ = ("_symbols", "_titles", "_out", "_in")

    def __init__(self) -> None:
        self._symbols: dict[str, Symbol] = {}
        self._titles: dict[str, str] = {}
        self._out: dict[str, list[str]] = {}
        self._in: dict[str, list[str]] = {}

    def register(self, symbol: Symbol, title: str = "") -> None:
        """Add a symbol. Registering again overwrites its title."""
        self._symbols[symbol.name] = symbol
        self._titles[symbol.name] = title
        self._out.setdefault(symbol.name, [])
        self._in.setdefault(symbol.name, [])

    def is_known(self, name: str) -> bool:
        return names.normalize(name) in self._symbols

    def title_of(self, name: str) -> str | None:
        return self._titles.get(names.normalize(name))

    def get_symbol(self, name: str) -> Symbol | None:
        return self._symbols.get(names.normalize(name))

    def add_reference(self, source: str, target: str) -> None:
        """Record that ``source`` mentions ``target``. Duplicates are ignored."""
        source = names.normalize(source)
        target = names.normalize(target)
        outgoing = self._out.setdefault(source, [])
        if target in outgoing:
            return
        outgoing.append(target)
        self._in.setdefault(target, []).append(source)

    def references_from(self, name: str) -> list[str]:
        return list(self._out.get(names.normalize(name), []))

    def referrers_of(self, name: str) -> list[str]:
        return list(self._in.get(names.normalize(name), []))

    def unresolved(self) -> list[str]:
        """Referenced names that are not registered symbols."""
        return sorted(name for name in self._in if name not in self._symbols)

    def link_path(self, from_name: str, to_name: str) -> str | None:
        """Relative page link from one symbol to another, or None if unlinkable."""
        if not self.is_known(to_name):
            return None
        return link_path(from_name, to_name)

    @property
    def symbols(self) -> dict[str, Symbol]:
        return self._symbols

    @property
    def num_symbols(self) -> int:
        return len(self._symbols)

    @property
    def num_references(self) -> int:
        return sum(len(targets) for targets in self._out.values())

    def __repr__(self) -> str:
        return f"ReferenceGraph(symbols={self.num_symbols}, references={self.num_references})"

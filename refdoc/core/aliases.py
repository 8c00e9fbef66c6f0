"""Per-symbol alias tables built from import directives."""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from refdoc.core import names

if TYPE_CHECKING:
    from refdoc.sources.models import SourceSymbol

logger = logging.getLogger(__name__)

_USE_DIRECTIVE = re.compile(r"\buse\s+(?:(function|const)\s+)?([^;{]*(?:\{[^}]*\})?)\s*;", re.I)
_AS_CLAUSE = re.compile(r"^(.+?)\s+as\s+(\S+)$", re.I)
_IMPORT_PATH = re.compile(r"^\\?[^\W\d][\w\\]*$")


@dataclass(frozen=True)
class ImportDirective:
    """A single ``use`` import: a fully-qualified path and the name it binds."""

    path: str
    alias: str
    kind: str = "class"


def parse_import_directives(text: str) -> list[ImportDirective]:
    """Extract every import directive from source text.

    Handles ``use function``/``use const``, ``as`` aliases, comma lists and
    group imports (``use App\\{Foo, Bar as Baz};``).
    """
    directives: list[ImportDirective] = []
    for match in _USE_DIRECTIVE.finditer(text):
        kind = (match.group(1) or "class").lower()
        body = match.group(2).strip()

        if "{" in body:
            prefix, _, group = body.partition("{")
            prefix = prefix.strip().rstrip(names.SEPARATOR)
            members = [m.strip() for m in group.rstrip("}").split(",")]
            clauses = [f"{prefix}{names.SEPARATOR}{m}" for m in members if m]
        else:
            clauses = [c.strip() for c in body.split(",") if c.strip()]

        for clause in clauses:
            directive = _parse_clause(clause, kind)
            if directive is not None:
                directives.append(directive)
    return directives


def _parse_clause(clause: str, kind: str) -> ImportDirective | None:
    alias_match = _AS_CLAUSE.match(clause)
    if alias_match:
        path, alias = alias_match.groups()
    else:
        path, alias = clause, None

    path = path.strip()
    if not _IMPORT_PATH.match(path):
        return None
    path = names.normalize(path)
    return ImportDirective(path=path, alias=alias or names.basename(path), kind=kind)


class AliasTable(Mapping[str, str]):
    """Short name to fully-qualified name, for one symbol.

    Every binding is registered twice: bare and with a leading separator.
    """

    def __init__(self, owner: str) -> None:
        self.owner = owner
        self._aliases: dict[str, str] = {}

    def add_import(self, directive: ImportDirective) -> None:
        """Register an explicit import, replacing any earlier binding."""
        self._aliases[directive.alias] = directive.path
        self._aliases[names.SEPARATOR + directive.alias] = directive.path

    def add_default(self, alias: str, target: str) -> bool:
        """Register a binding only where the key is still free."""
        added = False
        for key in (alias, names.SEPARATOR + alias):
            if key not in self._aliases:
                self._aliases[key] = target
                added = True
        return added

    def __getitem__(self, key: str) -> str:
        return self._aliases[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._aliases)

    def __len__(self) -> int:
        return len(self._aliases)

    def __repr__(self) -> str:
        return f"AliasTable(owner={self.owner!r}, entries={len(self)})"


class AliasTableBuilder:
    """Builds the alias table of every symbol in a project."""

    def __init__(self, symbols: Mapping[str, SourceSymbol]) -> None:
        self._symbols = symbols

    def build(self) -> dict[str, AliasTable]:
        """Build all tables, then merge sibling defaults once."""
        tables = {name: self.build_one(name) for name in self._symbols}
        merge_sibling_defaults(tables)
        return tables

    def build_one(self, name: str) -> AliasTable:
        """Build the table for one symbol from its own and its traits' imports."""
        table = AliasTable(name)
        symbol = self._symbols.get(name)
        if symbol is None:
            return table

        for directive in parse_import_directives(symbol.import_text):
            table.add_import(directive)

        for directive in self._trait_directives(symbol, visited={name}):
            table.add_default(directive.alias, directive.path)

        return table

    def _trait_directives(
        self, symbol: SourceSymbol, visited: set[str]
    ) -> Iterable[ImportDirective]:
        for trait_name in symbol.traits:
            trait_name = names.normalize(trait_name)
            if trait_name in visited:
                continue
            visited.add(trait_name)

            trait = self._symbols.get(trait_name)
            if trait is None:
                logger.debug("Trait %s used by %s is not in the project", trait_name, symbol.name)
                continue

            yield from parse_import_directives(trait.import_text)
            yield from self._trait_directives(trait, visited)


def merge_sibling_defaults(tables: Mapping[str, AliasTable]) -> None:
    """Let symbols in one namespace refer to each other by basename.

    Explicit imports already in a table always win.
    """
    groups: dict[str, list[str]] = defaultdict(list)
    for name in tables:
        groups[names.namespace_of(name)].append(name)

    for members in groups.values():
        for member in members:
            alias = names.basename(member)
            for other in members:
                tables[other].add_default(alias, member)

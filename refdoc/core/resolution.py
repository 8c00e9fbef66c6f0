"""Resolution facade: resolve annotation text on behalf of a symbol."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from refdoc.core import names
from refdoc.core.aliases import AliasTable
from refdoc.core.types import is_scalar, resolve_type

_QUALIFIED_NAME = re.compile(r"^\\?[^\W\d]\w*(?:\\[^\W\d]\w*)*$")


@dataclass
class Resolution:
    """Resolved annotation text plus every name it mentions, in order."""

    text: str
    references: list[str] = field(default_factory=list)


class TypeResolver:
    """Resolves type annotations against per-symbol alias tables.

    Owners without a table resolve against an empty one, so every name
    passes through unchanged.
    """

    def __init__(self, alias_tables: Mapping[str, AliasTable]) -> None:
        self._tables = alias_tables

    def aliases_for(self, owner: str) -> Mapping[str, str]:
        return self._tables.get(names.normalize(owner), {})

    def resolve(self, owner: str, text: str) -> Resolution:
        """Resolve ``text`` as written in the source of ``owner``.

        Raises:
            ValueError: If ``text`` is empty
        """
        resolved, references = resolve_type(text, self.aliases_for(owner))
        return Resolution(resolved, references)


def is_linkable(reference: str, owner: str) -> bool:
    """Whether a resolved reference may become a see-also entry or link.

    Scalars, the owner itself and anything that is not a plain qualified
    name (literals, template names with dashes) are dropped.
    """
    if is_scalar(reference):
        return False
    if not _QUALIFIED_NAME.match(reference):
        return False
    return names.normalize(reference) != names.normalize(owner)

"""Alias substitution over type expression trees."""

from __future__ import annotations

from collections.abc import Mapping

from refdoc.core.names import SEPARATOR
from refdoc.core.types.models import (
    ArrayShape,
    ArraySuffix,
    Atom,
    Callable,
    Generic,
    Nullable,
    Parenthesized,
    TypeExpr,
    Union,
)
from refdoc.core.types.parser import parse_type
from refdoc.core.types.scalars import is_scalar


def resolve_atom(name: str, aliases: Mapping[str, str]) -> str:
    """Resolve a bare type name against an alias table.

    Scalars pass through. Misses pass through unchanged, except that a
    namespaced name gains a leading separator.
    """
    if is_scalar(name):
        return name
    result = aliases.get(name, name)
    if SEPARATOR in result and not result.startswith(SEPARATOR):
        result = SEPARATOR + result
    return result


def resolve_expression(
    expr: TypeExpr, aliases: Mapping[str, str], references: list[str]
) -> TypeExpr:
    """Return a copy of ``expr`` with every atom resolved.

    Each resolved atom is appended to ``references`` in left-to-right order,
    scalars and misses included.
    """

    def walk(node: TypeExpr) -> TypeExpr:
        if isinstance(node, Atom):
            resolved = resolve_atom(node.name, aliases)
            references.append(resolved)
            return Atom(resolved)
        if isinstance(node, ArraySuffix):
            return ArraySuffix(walk(node.inner))
        if isinstance(node, Parenthesized):
            return Parenthesized(walk(node.inner))
        if isinstance(node, Nullable):
            return Nullable(walk(node.inner))
        if isinstance(node, Union):
            return Union([walk(alt) for alt in node.alternatives])
        if isinstance(node, Callable):
            return Callable(
                walk(node.params) if node.params is not None else None,
                walk(node.returns) if node.returns is not None else None,
            )
        if isinstance(node, ArrayShape):
            return ArrayShape([(key, walk(value)) for key, value in node.entries])
        if isinstance(node, Generic):
            main = walk(node.main)
            return Generic(main, [walk(arg) for arg in node.args])
        raise TypeError(f"Unknown type expression node: {node!r}")

    return walk(expr)


def resolve_type(text: str, aliases: Mapping[str, str]) -> tuple[str, list[str]]:
    """Resolve annotation text, returning the new text and referenced names."""
    if not text.strip():
        raise ValueError("Cannot resolve an empty type annotation")
    references: list[str] = []
    resolved = resolve_expression(parse_type(text), aliases, references)
    return resolved.render(), references

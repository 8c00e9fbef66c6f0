"""Recursive-descent parser for type annotations.

Each form is tried against the whole span, in a fixed order, so the first
match is the outermost node:

1. ``T[]``                 -> ArraySuffix
2. ``(T)``                 -> Parenthesized
3. ``A|B``                 -> Union
4. ``callable(P)[: R]``    -> Callable
5. ``array{k: T, ...}``    -> ArrayShape
6. ``Main<A, B>``          -> Generic
7. ``?T``                  -> Nullable
8. anything else           -> Atom

Parsing never fails: text matching no structured form becomes an Atom.
"""

from __future__ import annotations

import re

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
from refdoc.core.types.splitting import matching_close, matching_open, split_top_level

_CALLABLE_PREFIX = "callable("
_SHAPE_PREFIX = "array{"

_SHAPE_KEY = re.compile(r"^([\w'\"-]+\??)\s*:(?!:)\s*(.+)$", re.DOTALL)


def parse_type(text: str) -> TypeExpr:
    """Parse annotation text into a type expression tree."""
    text = text.strip()

    if text.endswith("[]"):
        return ArraySuffix(parse_type(text[:-2]))

    if text.startswith("(") and matching_close(text, 0) == len(text) - 1:
        return Parenthesized(parse_type(text[1:-1]))

    alternatives = split_top_level("|", text)
    if len(alternatives) > 1:
        return Union([parse_type(alt) for alt in alternatives])

    if text.startswith(_CALLABLE_PREFIX):
        node = _parse_callable(text)
        if node is not None:
            return node

    if text.startswith(_SHAPE_PREFIX) and text.endswith("}"):
        return _parse_shape(text[len(_SHAPE_PREFIX) : -1])

    if text.endswith(">"):
        node = _parse_generic(text)
        if node is not None:
            return node

    if text.startswith("?") and len(text) > 1:
        return Nullable(parse_type(text[1:]))

    return Atom(text)


def _parse_callable(text: str) -> Callable | None:
    close = matching_close(text, len(_CALLABLE_PREFIX) - 1)
    if close is None:
        return None

    interior = text[len(_CALLABLE_PREFIX) : close].strip()
    params = parse_type(interior) if interior else None

    rest = text[close + 1 :].strip()
    if not rest:
        return Callable(params)
    if rest.startswith(":") and rest[1:].strip():
        return Callable(params, parse_type(rest[1:]))
    return None


def _parse_shape(interior: str) -> ArrayShape:
    shape = ArrayShape()
    for element in split_top_level(",", interior):
        if not element:
            continue
        match = _SHAPE_KEY.match(element)
        if match:
            key, value = match.groups()
            shape.entries.append((key, parse_type(value)))
        else:
            shape.entries.append((None, parse_type(element)))
    return shape


def _parse_generic(text: str) -> Generic | None:
    opening = matching_open(text, len(text) - 1)
    if not opening or text[opening] != "<":
        return None

    main = text[:opening].strip()
    if not main:
        return None

    args = [arg for arg in split_top_level(",", text[opening + 1 : -1]) if arg]
    return Generic(parse_type(main), [parse_type(arg) for arg in args])

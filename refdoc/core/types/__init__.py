"""
Type expressions: parsing and alias resolution of docblock type annotations.

Structures:
    - TypeExpr and its node kinds (Atom, Nullable, ArraySuffix, Union,
      Callable, ArrayShape, Generic, Parenthesized)

Functions:
    - parse_type(): annotation text to a tree (total, never raises)
    - resolve_type(): parse, substitute aliases, render back to text
    - split_top_level(): bracket-aware splitting
    - is_scalar(): built-in type check
"""

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
from refdoc.core.types.resolver import resolve_atom, resolve_expression, resolve_type
from refdoc.core.types.scalars import SCALAR_TYPES, is_scalar
from refdoc.core.types.splitting import split_top_level

__all__ = [
    # Nodes
    "TypeExpr",
    "Atom",
    "Nullable",
    "ArraySuffix",
    "Parenthesized",
    "Union",
    "Callable",
    "ArrayShape",
    "Generic",
    # Functions
    "parse_type",
    "resolve_atom",
    "resolve_expression",
    "resolve_type",
    "split_top_level",
    "is_scalar",
    "SCALAR_TYPES",
]

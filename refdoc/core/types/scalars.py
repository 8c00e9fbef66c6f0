"""Built-in primitive and pseudo-type names."""

from __future__ import annotations

SCALAR_TYPES = frozenset(
    {
        "string",
        "int",
        "integer",
        "float",
        "double",
        "bool",
        "boolean",
        "void",
        "mixed",
        "object",
        "callable",
        "iterable",
        "class-string",
        "array",
        "array-key",
        "static",
        "self",
        "parent",
        "$this",
        "null",
        "true",
        "false",
        "list",
        "never",
        "resource",
        "scalar",
        "numeric",
        "positive-int",
        "negative-int",
        "non-empty-string",
        "non-empty-array",
        "non-empty-list",
    }
)


def is_scalar(name: str) -> bool:
    """Check if a type name is a built-in (never resolved, never linked).

    Matching is case-sensitive, so an imported class such as ``Scalar`` still
    resolves through the alias table.
    """
    return name.strip() in SCALAR_TYPES

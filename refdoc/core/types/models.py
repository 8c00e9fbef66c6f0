"""Type expression tree.

Nodes are built transiently while resolving an annotation and render back to
annotation text with ``render()``.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


class TypeExpr:
    """Base class for type expression nodes."""

    def render(self) -> str:
        raise NotImplementedError

    def children(self) -> list[TypeExpr]:
        return []

    def atoms(self) -> Iterator[Atom]:
        """Atoms in left-to-right order."""
        for child in self.children():
            yield from child.atoms()

    def __str__(self) -> str:
        return self.render()


@dataclass
class Atom(TypeExpr):
    name: str

    def render(self) -> str:
        return self.name

    def atoms(self) -> Iterator[Atom]:
        yield self


@dataclass
class Nullable(TypeExpr):
    inner: TypeExpr

    def render(self) -> str:
        return "?" + self.inner.render()

    def children(self) -> list[TypeExpr]:
        return [self.inner]


@dataclass
class ArraySuffix(TypeExpr):
    inner: TypeExpr

    def render(self) -> str:
        return self.inner.render() + "[]"

    def children(self) -> list[TypeExpr]:
        return [self.inner]


@dataclass
class Parenthesized(TypeExpr):
    inner: TypeExpr

    def render(self) -> str:
        return f"({self.inner.render()})"

    def children(self) -> list[TypeExpr]:
        return [self.inner]


@dataclass
class Union(TypeExpr):
    alternatives: list[TypeExpr] = field(default_factory=list)

    def render(self) -> str:
        return "|".join(alt.render() for alt in self.alternatives)

    def children(self) -> list[TypeExpr]:
        return list(self.alternatives)


@dataclass
class Callable(TypeExpr):
    """``callable(<params>)``, optionally followed by ``: <return>``."""

    params: TypeExpr | None = None
    returns: TypeExpr | None = None

    def render(self) -> str:
        text = f"callable({self.params.render() if self.params else ''})"
        if self.returns is not None:
            text += f": {self.returns.render()}"
        return text

    def children(self) -> list[TypeExpr]:
        return [c for c in (self.params, self.returns) if c is not None]


@dataclass
class ArrayShape(TypeExpr):
    """``array{key: type, ...}``; keys are ``None`` for positional entries."""

    entries: list[tuple[str | None, TypeExpr]] = field(default_factory=list)

    def render(self) -> str:
        parts = [
            value.render() if key is None else f"{key}: {value.render()}"
            for key, value in self.entries
        ]
        return "array{" + ", ".join(parts) + "}"

    def children(self) -> list[TypeExpr]:
        return [value for _, value in self.entries]


@dataclass
class Generic(TypeExpr):
    main: TypeExpr
    args: list[TypeExpr] = field(default_factory=list)

    def render(self) -> str:
        args = ", ".join(arg.render() for arg in self.args)
        return f"{self.main.render()}<{args}>"

    def children(self) -> list[TypeExpr]:
        return [self.main, *self.args]

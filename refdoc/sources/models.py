"""Data models for discovered symbols (before documents are built)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from refdoc.core import names
from refdoc.core.models import Symbol, SymbolKind


@dataclass
class SourceParameter:
    """A parameter as declared in a signature."""

    name: str
    type: str | None = None
    default: str | None = None
    variadic: bool = False
    by_reference: bool = False
    promoted: str | None = None

    @property
    def optional(self) -> bool:
        return self.default is not None and not self.variadic

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SourceParameter:
        return cls(
            name=data["name"].lstrip("$"),
            type=data.get("type"),
            default=data.get("default"),
            variadic=bool(data.get("variadic", False)),
            by_reference=bool(data.get("by_reference", False)),
        )


@dataclass
class SourceMethod:
    """A public method of a class-like symbol."""

    name: str
    declaring: str
    doc_comment: str | None = None
    parameters: list[SourceParameter] = field(default_factory=list)
    return_type: str | None = None
    is_static: bool = False
    is_abstract: bool = False
    line: int = 0

    def __post_init__(self) -> None:
        self.declaring = names.normalize(self.declaring)

    @classmethod
    def from_dict(cls, data: dict[str, Any], declaring: str) -> SourceMethod:
        return cls(
            name=data["name"],
            declaring=data.get("declaring", declaring),
            doc_comment=data.get("doc"),
            parameters=[SourceParameter.from_dict(p) for p in data.get("parameters", [])],
            return_type=data.get("return_type"),
            is_static=bool(data.get("static", False)),
            is_abstract=bool(data.get("abstract", False)),
            line=int(data.get("line", 0)),
        )


@dataclass
class SourceProperty:
    """A public instance property."""

    name: str
    type: str | None = None
    doc_comment: str | None = None
    default: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SourceProperty:
        return cls(
            name=data["name"].lstrip("$"),
            type=data.get("type"),
            doc_comment=data.get("doc"),
            default=data.get("default"),
        )


@dataclass
class SourceConstant:
    """A public class constant."""

    name: str
    value: str = ""
    doc_comment: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SourceConstant:
        return cls(
            name=data["name"],
            value=str(data.get("value", "")),
            doc_comment=data.get("doc"),
        )


@dataclass
class SourceSymbol:
    """A class, interface, trait or function as handed over by a source.

    ``import_text`` holds the raw import directives in scope of the symbol;
    ``traits``, ``parent`` and ``interfaces`` are fully qualified.
    """

    name: str
    kind: SymbolKind
    file: Path | None = None
    line: int = 0
    import_text: str = ""
    doc_comment: str | None = None
    is_abstract: bool = False
    parent: str | None = None
    interfaces: list[str] = field(default_factory=list)
    traits: list[str] = field(default_factory=list)
    methods: list[SourceMethod] = field(default_factory=list)
    properties: list[SourceProperty] = field(default_factory=list)
    constants: list[SourceConstant] = field(default_factory=list)
    parameters: list[SourceParameter] = field(default_factory=list)
    return_type: str | None = None

    def __post_init__(self) -> None:
        self.name = names.normalize(self.name)
        self.traits = [names.normalize(t) for t in self.traits]
        self.interfaces = [names.normalize(i) for i in self.interfaces]
        if self.parent:
            self.parent = names.normalize(self.parent)

    @property
    def symbol(self) -> Symbol:
        return Symbol(self.name, self.kind)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SourceSymbol:
        """Create a SourceSymbol from a manifest entry."""
        name = names.normalize(data["name"])
        return cls(
            name=name,
            kind=SymbolKind(data.get("kind", "class")),
            file=Path(data["file"]) if data.get("file") else None,
            line=int(data.get("line", 0)),
            import_text=data.get("imports", ""),
            doc_comment=data.get("doc"),
            is_abstract=bool(data.get("abstract", False)),
            parent=data.get("parent"),
            interfaces=list(data.get("interfaces", [])),
            traits=list(data.get("traits", [])),
            methods=[SourceMethod.from_dict(m, name) for m in data.get("methods", [])],
            properties=[SourceProperty.from_dict(p) for p in data.get("properties", [])],
            constants=[SourceConstant.from_dict(c) for c in data.get("constants", [])],
            parameters=[SourceParameter.from_dict(p) for p in data.get("parameters", [])],
            return_type=data.get("return_type"),
        )

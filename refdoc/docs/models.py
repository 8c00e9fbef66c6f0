"""Document models: what a generated page says about a symbol."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from refdoc.core import names
from refdoc.core.graph import page_path
from refdoc.core.models import SymbolKind

_NON_WORD = re.compile(r"[^\w ]+")
_SPACES = re.compile(r" +")


@dataclass
class SeeAlso:
    """A see-also entry; ``link`` is None when the target has no page."""

    target: str
    link: str | None = None


@dataclass
class DocRecord:
    """Fields shared by every document."""

    name: str
    title: str = ""
    description: str = ""
    see_also: list[SeeAlso] = field(default_factory=list)
    authors: list[str] = field(default_factory=list)
    ignored: bool = False

    def add_see_also(self, target: str, link: str | None) -> None:
        """Append an entry unless the same target is already listed."""
        if any(entry.target == target for entry in self.see_also):
            return
        self.see_also.append(SeeAlso(target, link))


@dataclass
class Parameter:
    name: str
    type: str
    description: str = ""
    default: str | None = None
    variadic: bool = False
    by_reference: bool = False

    def render(self) -> str:
        text = f"{self.type} "
        if self.by_reference:
            text += "&"
        if self.variadic:
            text += "..."
        text += f"${self.name}"
        if self.default is not None and not self.variadic:
            text += f" = {self.default}"
        return text


@dataclass
class Signature:
    """Parameters and return value of a function or method."""

    name: str
    parameters: list[Parameter] = field(default_factory=list)
    return_type: str | None = None
    return_description: str = ""

    def render(self) -> str:
        text = f"{self.name}({', '.join(p.render() for p in self.parameters)})"
        if self.return_type:
            text += f": {self.return_type}"
        return text


@dataclass
class Property:
    name: str
    type: str
    description: str = ""


@dataclass
class Constant:
    name: str
    value: str
    description: str = ""


@dataclass
class MethodDoc:
    """A method as shown on its class page."""

    record: DocRecord
    signature: Signature
    declaring: str
    is_static: bool = False
    is_abstract: bool = False
    inherited: bool = False

    @property
    def name(self) -> str:
        return self.signature.name

    @property
    def anchor(self) -> str:
        return make_anchor(self.signature.render())


@dataclass
class Document:
    """A page-level document, tagged by ``kind``.

    Class-likes carry ``constants``, ``properties`` and ``methods``;
    functions carry ``signature``.
    """

    kind: SymbolKind
    record: DocRecord
    is_abstract: bool = False
    constants: list[Constant] = field(default_factory=list)
    properties: list[Property] = field(default_factory=list)
    methods: list[MethodDoc] = field(default_factory=list)
    signature: Signature | None = None

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def page(self) -> str:
        return page_path(self.record.name)

    @property
    def category(self) -> str:
        """Index section the document is listed under."""
        if self.kind == SymbolKind.FUNCTION:
            return "Functions"
        if self.kind == SymbolKind.INTERFACE:
            return "Interfaces"
        if self.kind == SymbolKind.TRAIT:
            return "Traits"
        if self.is_abstract:
            return "Abstract classes"
        return "Classes"

    @property
    def basename(self) -> str:
        return names.basename(self.record.name)


def make_anchor(text: str) -> str:
    """Markdown heading anchor for a piece of heading text."""
    anchor = text.lower()
    anchor = _NON_WORD.sub(" ", anchor)
    anchor = _SPACES.sub(" ", anchor)
    return anchor.replace(" ", "-").strip("-")

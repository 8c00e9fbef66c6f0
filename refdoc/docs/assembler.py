"""Document assembler: turns discovered symbols into page documents.

Runs in the second build phase. Every symbol is already registered in the
reference graph and every alias table exists; the assembler only reads them,
adding reference edges as types are resolved.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

from refdoc.core import names
from refdoc.core.graph import ReferenceGraph
from refdoc.core.models import SymbolKind
from refdoc.core.resolution import TypeResolver, is_linkable
from refdoc.docs.models import (
    Constant,
    DocRecord,
    Document,
    MethodDoc,
    Parameter,
    Property,
    Signature,
)
from refdoc.sources.docblock import DocBlock, parse_docblock, split_type
from refdoc.sources.models import SourceMethod, SourceParameter, SourceSymbol

logger = logging.getLogger(__name__)

_INHERIT_TAGS = ("inheritDoc", "inheritdoc")
_CONSTRUCTOR = "__construct"


class DocumentAssembler:
    """Builds documents for symbols, resolving every type on the way."""

    def __init__(
        self,
        symbols: Mapping[str, SourceSymbol],
        resolver: TypeResolver,
        graph: ReferenceGraph,
        authors: list[str] | None = None,
    ) -> None:
        self._symbols = symbols
        self._resolver = resolver
        self._graph = graph
        self._authors = list(authors or [])

    def assemble(self, symbol: SourceSymbol, doc: DocBlock | None = None) -> Document:
        """Build the document of one symbol."""
        doc = doc if doc is not None else parse_docblock(symbol.doc_comment)
        record = self._record(symbol.name, doc, page=symbol.name)

        if symbol.kind == SymbolKind.FUNCTION:
            signature = self._signature(
                names.basename(symbol.name),
                symbol.parameters,
                symbol.return_type,
                doc,
                owner=symbol.name,
                record=record,
            )
            return Document(SymbolKind.FUNCTION, record, signature=signature)

        document = Document(symbol.kind, record, is_abstract=symbol.is_abstract)
        document.constants = self._constants(symbol)
        document.properties = self._properties(symbol, doc, record)
        document.methods = self._methods(symbol)
        return document

    def _record(self, name: str, doc: DocBlock, page: str, owner: str | None = None) -> DocRecord:
        """Build the shared record; ``@see`` targets resolve as written in ``owner``."""
        authors = list(dict.fromkeys(self._authors + doc.authors()))
        record = DocRecord(
            name=name,
            title=doc.title,
            description=doc.description,
            authors=authors,
            ignored=doc.ignored,
        )
        for value in doc.see_also():
            self._add_see_also(record, value, page, owner or page)
        return record

    def _add_see_also(self, record: DocRecord, value: str, page: str, owner: str) -> None:
        target, _ = split_type(value)
        if "://" in target:
            record.add_see_also(target, target)
            return

        class_name, _, member = target.partition("::")
        if not class_name:
            record.add_see_also(target, None)
            return

        resolved = self._resolver.resolve(owner, class_name).text
        link = self._graph.link_path(page, resolved) if is_linkable(resolved, "") else None
        if link is not None:
            self._graph.add_reference(page, resolved)
        record.add_see_also(f"{resolved}::{member}" if member else resolved, link)

    def _resolve(self, text: str, owner: str, page: str, record: DocRecord) -> str:
        """Resolve annotation text as written in ``owner``, for a page about ``page``.

        Linkable references become see-also entries of ``record``.
        """
        resolution = self._resolver.resolve(owner, text)
        for reference in resolution.references:
            if not is_linkable(reference, owner) or reference == names.normalize(page):
                continue
            self._graph.add_reference(page, reference)
            record.add_see_also(reference, self._graph.link_path(page, reference))
        return resolution.text

    def _signature(
        self,
        name: str,
        parameters: list[SourceParameter],
        return_type: str | None,
        doc: DocBlock,
        owner: str,
        record: DocRecord,
        page: str | None = None,
    ) -> Signature:
        page = page or owner
        tags = doc.params()

        result = []
        for param in parameters:
            tag = tags.get(param.name)
            type_text = (tag.type if tag else None) or param.type or "mixed"
            result.append(
                Parameter(
                    name=param.name,
                    type=self._resolve(type_text, owner, page, record),
                    description=tag.description if tag else "",
                    default=param.default if param.optional else None,
                    variadic=param.variadic or bool(tag and tag.variadic),
                    by_reference=param.by_reference,
                )
            )

        signature = Signature(name, result)
        if name == _CONSTRUCTOR:
            return signature

        return_tag = doc.return_tag()
        type_text = return_tag.type if return_tag else return_type
        if type_text:
            signature.return_type = self._resolve(type_text, owner, page, record)
        if return_tag:
            signature.return_description = return_tag.description
        return signature

    def _constants(self, symbol: SourceSymbol) -> list[Constant]:
        result = []
        for constant in symbol.constants:
            doc = parse_docblock(constant.doc_comment)
            if doc.ignored:
                continue
            description = "\n".join(part for part in (doc.title, doc.description) if part)
            result.append(Constant(constant.name, constant.value, description))
        return result

    def _properties(self, symbol: SourceSymbol, doc: DocBlock, record: DocRecord) -> list[Property]:
        found: dict[str, Property] = {}
        for prop in symbol.properties:
            prop_doc = parse_docblock(prop.doc_comment)
            if prop_doc.ignored:
                continue
            var = prop_doc.var_tag()
            type_text = (var.type if var else None) or prop.type or "mixed"
            description = (var.description if var else "") or prop_doc.title
            found[prop.name] = Property(
                prop.name, self._resolve(type_text, symbol.name, symbol.name, record), description
            )

        # Class-level @property tags describe magic properties and win.
        for tag in doc.property_tags():
            if not tag.name:
                continue
            found[tag.name] = Property(
                tag.name, self._resolve(tag.type, symbol.name, symbol.name, record), tag.description
            )
        return list(found.values())

    def _methods(self, symbol: SourceSymbol) -> list[MethodDoc]:
        result = []
        for method in symbol.methods:
            result.append(self._method(symbol, method, inherited=False))
        for method in self._inherited_methods(symbol):
            result.append(self._method(symbol, method, inherited=True))
        return [m for m in result if not m.record.ignored]

    def _method(self, symbol: SourceSymbol, method: SourceMethod, inherited: bool) -> MethodDoc:
        doc = parse_docblock(method.doc_comment)
        doc_owner = method.declaring
        if _wants_inherited_doc(doc):
            source = self._ancestor_doc(symbol, method.name)
            if source is not None:
                doc = parse_docblock(source.doc_comment)
                doc_owner = source.declaring

        record = self._record(method.name, doc, page=symbol.name, owner=doc_owner)
        signature = self._signature(
            method.name,
            method.parameters,
            method.return_type,
            doc,
            owner=method.declaring,
            record=record,
            page=symbol.name,
        )
        return MethodDoc(
            record=record,
            signature=signature,
            declaring=method.declaring,
            is_static=method.is_static,
            is_abstract=method.is_abstract,
            inherited=inherited,
        )

    def _inherited_methods(self, symbol: SourceSymbol) -> list[SourceMethod]:
        """Public methods from traits, parents and interfaces not overridden."""
        seen = {m.name.lower() for m in symbol.methods}
        result = []
        for ancestor in self._ancestors(symbol):
            for method in ancestor.methods:
                if method.name.lower() in seen:
                    continue
                seen.add(method.name.lower())
                result.append(method)
        return result

    def _ancestor_doc(self, symbol: SourceSymbol, method_name: str) -> SourceMethod | None:
        """The nearest ancestor method carrying its own docblock."""
        for ancestor in self._ancestors(symbol):
            for method in ancestor.methods:
                if method.name.lower() == method_name.lower() and method.doc_comment:
                    if not _wants_inherited_doc(parse_docblock(method.doc_comment)):
                        return method
        return None

    def _ancestors(self, symbol: SourceSymbol) -> Iterator[SourceSymbol]:
        """Walk traits first, then the parent chain, then interfaces.

        Names missing from the project are skipped; cycles are cut.
        """
        visited = {symbol.name}
        queue = list(symbol.traits)
        if symbol.parent:
            queue.append(symbol.parent)
        queue.extend(symbol.interfaces)

        while queue:
            name = queue.pop(0)
            if name in visited:
                continue
            visited.add(name)

            ancestor = self._symbols.get(name)
            if ancestor is None:
                logger.debug("Ancestor %s of %s is not in the project", name, symbol.name)
                continue
            yield ancestor

            queue.extend(ancestor.traits)
            if ancestor.parent:
                queue.append(ancestor.parent)
            queue.extend(ancestor.interfaces)


def _wants_inherited_doc(doc: DocBlock) -> bool:
    if doc.has_tag(*_INHERIT_TAGS):
        return True
    if "{@inheritdoc}" in doc.title.lower():
        return True
    return not doc.title and not doc.tags

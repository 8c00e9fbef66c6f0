"""Markdown rendering of documents and the index page."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import yaml

from refdoc.core import names
from refdoc.core.graph import ReferenceGraph, index_link
from refdoc.docs.models import DocRecord, Document, MethodDoc, Parameter, SeeAlso

INDEX_SECTIONS = ("Functions", "Interfaces", "Abstract classes", "Classes", "Traits")


def render_front_matter(fields: Mapping[str, Any]) -> str:
    """YAML front matter block, including the ``---`` fences."""
    body = yaml.safe_dump(
        dict(fields),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=2**31 - 1,
    )
    return f"---\n{body}---\n"


def display_name(name: str) -> str:
    """A fully-qualified name as shown in headings (no leading separator)."""
    return name.lstrip(names.SEPARATOR)


class MarkdownRenderer:
    """Renders documents to Markdown pages.

    ``front_matter`` is merged into every symbol page, ``index_front_matter``
    into the index page. Both override the generated keys.
    """

    def __init__(
        self,
        graph: ReferenceGraph,
        front_matter: Mapping[str, Any] | None = None,
        index_front_matter: Mapping[str, Any] | None = None,
    ) -> None:
        self._graph = graph
        self._front_matter = dict(front_matter or {})
        self._index_front_matter = dict(index_front_matter or {})

    def render(self, document: Document) -> str:
        """Render the page of one document."""
        lines = self._header(document.record)
        if document.signature is not None:
            lines += [f"### `{document.signature.render()}`", ""]
            lines += self._parameters(document.signature.parameters)
            if document.signature.return_description:
                lines += [f"Return value: {document.signature.return_description}", ""]

        if document.constants:
            lines += ["## Constants"]
            for constant in document.constants:
                description = constant.description.replace("\n", "\n  ")
                lines += [f"* `{display_name(document.name)}::{constant.name}`: {description}".rstrip()]
            lines += [""]

        if document.properties:
            lines += ["## Properties"]
            for prop in document.properties:
                lines += [f"* `${prop.name}`: `{prop.type}` {prop.description}".rstrip()]
            lines += [""]

        if document.methods:
            lines += ["## Method list:"]
            for method in document.methods:
                lines += [f"* [`{method.signature.render()}`](#{method.anchor})"]
            lines += ["", "## Methods:"]
            for method in document.methods:
                lines += self._method(method)

        lines += self._see_also(document.record.see_also)
        return "\n".join(lines).rstrip() + "\n"

    def render_index(
        self, documents: Iterable[Document], title: str, description: str = ""
    ) -> str:
        """Render the index page listing every document by category."""
        summary = description.split("\n", 1)[0].strip()
        fields = {"title": title, "description": summary, **self._index_front_matter}

        sections: dict[str, list[str]] = {section: [] for section in INDEX_SECTIONS}
        for document in documents:
            label = display_name(document.name)
            if document.record.title:
                label += f": {document.record.title}"
            sections[document.category].append(f"* [{label}]({document.page})")

        lines = [render_front_matter(fields).rstrip("\n"), f"# `{title}`", ""]
        if summary:
            lines += [summary, ""]
        for section, entries in sections.items():
            if entries:
                lines += [f"## {section}", *entries, ""]
        return "\n".join(lines).rstrip() + "\n"

    def _header(self, record: DocRecord) -> list[str]:
        fields = {
            "title": f"{display_name(record.name)}: {record.title}",
            "description": record.description,
            **self._front_matter,
        }
        lines = [
            render_front_matter(fields).rstrip("\n"),
            f"# `{display_name(record.name)}`",
            f"[Back to index]({index_link(record.name)})",
            "",
        ]
        if record.authors:
            lines += [f"> Author: {author}  " for author in record.authors]
            lines += [""]
        if record.title:
            lines += [record.title, ""]
        if record.description:
            lines += [record.description, ""]
        return lines

    def _method(self, method: MethodDoc) -> list[str]:
        lines = [f"### `{method.signature.render()}`", ""]
        if method.record.title:
            lines += [method.record.title]
        if method.record.description:
            lines += [method.record.description.replace("\n", "  \n")]
        if method.inherited:
            lines += [f"Inherited from `{display_name(method.declaring)}`."]
        lines += [""]
        lines += self._parameters(method.signature.parameters)
        if method.signature.return_description:
            lines += [f"Return value: {method.signature.return_description}", ""]
        lines += self._see_also(method.record.see_also)
        return lines

    def _parameters(self, parameters: list[Parameter]) -> list[str]:
        if not parameters:
            return []
        lines = ["Parameters:", ""]
        for param in parameters:
            variadic = "..." if param.variadic else ""
            lines += [f"* `{variadic}${param.name}`: `{param.type}` {param.description}".rstrip()]
        return lines + [""]

    def _see_also(self, entries: list[SeeAlso]) -> list[str]:
        if not entries:
            return []
        lines = ["#### See also:"]
        for entry in entries:
            lines += [f"* {self._see_also_item(entry)}"]
        return lines + [""]

    def _see_also_item(self, entry: SeeAlso) -> str:
        if entry.link is None:
            return f"`{display_name(entry.target)}`"
        label = f"`{display_name(entry.target)}`"
        title = self._graph.title_of(entry.target)
        if title:
            label += f": {title}"
        return f"[{label}]({entry.link})"

"""Builder that coordinates symbol discovery, resolution and page output."""

from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass
from pathlib import Path

from refdoc.config import ProjectConfig
from refdoc.core import names
from refdoc.core.aliases import AliasTableBuilder
from refdoc.core.exceptions import SymbolNotFoundError
from refdoc.core.graph import INDEX_PAGE, ReferenceGraph
from refdoc.core.models import BuildStats, SymbolKind
from refdoc.core.resolution import Resolution, TypeResolver
from refdoc.docs import Document, DocumentAssembler, MarkdownRenderer, PageWriter
from refdoc.sources import ManifestSource, PhpSource, SymbolSource, parse_docblock
from refdoc.sources.docblock import DocBlock
from refdoc.sources.models import SourceSymbol

logger = logging.getLogger(__name__)


@dataclass
class Project:
    """The outcome of a build: documents plus the tables that produced them."""

    config: ProjectConfig
    documents: list[Document]
    graph: ReferenceGraph
    resolver: TypeResolver
    stats: BuildStats

    def get(self, name: str) -> Document:
        """Get the document of a symbol.

        Raises:
            SymbolNotFoundError: If no document has that name
        """
        name = names.normalize(name)
        for document in self.documents:
            if document.name == name:
                return document
        raise SymbolNotFoundError(f"Symbol not found: {name}")

    def find(self, query: str = "", kind: SymbolKind | None = None) -> list[Document]:
        """Documents whose name contains ``query`` (case-insensitive)."""
        query = query.lower()
        return [
            d
            for d in self.documents
            if query in d.name.lower() and (kind is None or d.kind == kind)
        ]

    def resolve(self, owner: str, text: str) -> Resolution:
        """Resolve annotation text as written in the source of ``owner``.

        Raises:
            SymbolNotFoundError: If ``owner`` is not a documented symbol
        """
        if not self.is_known(owner):
            raise SymbolNotFoundError(f"Symbol not found: {names.normalize(owner)}")
        return self.resolver.resolve(owner, text)

    def link_path(self, from_name: str, to_name: str) -> str | None:
        return self.graph.link_path(from_name, to_name)

    def is_known(self, name: str) -> bool:
        return self.graph.is_known(name)

    def title_of(self, name: str) -> str | None:
        return self.graph.title_of(name)


class DocBuilder:
    """Builds reference documentation for a project.

    Uses a two-phase approach:
    1. First phase: discover symbols, build every alias table and register
       every documented symbol in the reference graph
    2. Second phase: assemble documents, resolving types and recording
       references

    Links are only computed in the second phase, so they never depend on the
    order in which symbols were discovered.
    """

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config

    def default_source(self) -> SymbolSource:
        if self.config.manifest is not None:
            return ManifestSource(self.config.manifest)
        return PhpSource(self.config.root, self.config.exclude)

    def build(self, source: SymbolSource | None = None) -> Project:
        """Discover, resolve and assemble every symbol of the project.

        Raises:
            SourceError: If the source as a whole cannot be read
        """
        source = source or self.default_source()
        stats = BuildStats()
        graph = ReferenceGraph()

        discovered = source.symbols()
        stats.skipped += source.skipped
        stats.errors.extend(source.errors)

        symbols: dict[str, SourceSymbol] = {}
        for symbol in discovered:
            if symbol.name in symbols:
                logger.warning("Duplicate symbol %s, keeping the first declaration", symbol.name)
                continue
            symbols[symbol.name] = symbol

        tables = AliasTableBuilder(symbols).build()

        documented: list[tuple[SourceSymbol, DocBlock]] = []
        for symbol in symbols.values():
            if not self._in_scope(symbol.name):
                stats.skipped += 1
                continue
            if symbol.kind == SymbolKind.FUNCTION and not symbol.doc_comment:
                logger.warning("%s has no docblock", symbol.name)
                stats.ignored += 1
                continue
            doc = parse_docblock(symbol.doc_comment)
            if doc.ignored:
                logger.debug("Ignoring %s (internal or deprecated)", symbol.name)
                stats.ignored += 1
                continue
            documented.append((symbol, doc))
            graph.register(symbol.symbol, doc.title)

        resolver = TypeResolver(tables)
        assembler = DocumentAssembler(symbols, resolver, graph, self.config.authors)
        documents = [assembler.assemble(symbol, doc) for symbol, doc in documented]

        stats.symbols = len(documents)
        stats.references = graph.num_references
        stats.unresolved = len(graph.unresolved())
        logger.info("Built %d documents with %d references", stats.symbols, stats.references)

        return Project(self.config, documents, graph, resolver, stats)

    def render(self, project: Project) -> dict[str, str]:
        """Render every page, keyed by its path relative to the output directory."""
        renderer = MarkdownRenderer(
            project.graph,
            self.config.page_front_matter(),
            self.config.index_page_front_matter(),
        )
        pages = {document.page: renderer.render(document) for document in project.documents}
        pages[INDEX_PAGE] = renderer.render_index(
            project.documents, self.config.name, self.config.description
        )
        return pages

    def write(self, project: Project, output: Path | None = None) -> BuildStats:
        """Render and write every page.

        Raises:
            RefdocError: If a page cannot be written
        """
        writer = PageWriter(output or self.config.output_dir)
        project.stats.pages = writer.write_all(self.render(project))
        logger.info("Wrote %d pages to %s", project.stats.pages, writer.output)
        return project.stats

    def _in_scope(self, name: str) -> bool:
        """Inside the root namespace and not matched by an ignore pattern."""
        namespace = self.config.namespace
        if namespace and not name.startswith(namespace + names.SEPARATOR):
            return False
        bare = name.lstrip(names.SEPARATOR)
        return not any(
            fnmatch.fnmatchcase(bare, pattern.lstrip(names.SEPARATOR))
            for pattern in self.config.ignore
        )

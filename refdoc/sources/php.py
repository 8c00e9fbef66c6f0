"""PHP source scanner for extracting documented symbols.

Files are parsed with tree-sitter's PHP grammar; the visitor walks the syntax
tree and collects namespaces, imports and top-level declarations.
"""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Callable
from functools import cache
from pathlib import Path

import tree_sitter_php
from tree_sitter import Language, Node, Parser

from refdoc.core import names
from refdoc.core.aliases import parse_import_directives
from refdoc.core.exceptions import SourceError
from refdoc.core.models import SymbolKind
from refdoc.sources.models import (
    SourceConstant,
    SourceMethod,
    SourceParameter,
    SourceProperty,
    SourceSymbol,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[Path, int, int], None]

DEFAULT_EXCLUDES = [
    "vendor",
    "node_modules",
    "build",
    "dist",
]

_HIDDEN = {"protected", "private"}
_NAME_NODES = ("name", "qualified_name")
_PARAMETER_NODES = ("simple_parameter", "variadic_parameter", "property_promotion_parameter")
_TYPE_NODES = {
    "named_type",
    "optional_type",
    "primitive_type",
    "union_type",
    "intersection_type",
    "disjunctive_normal_form_type",
}


@cache
def _parser() -> Parser:
    return Parser(Language(tree_sitter_php.language_php()))


class PhpSource:
    """Symbol source that scans a directory of PHP files."""

    def __init__(
        self,
        root: Path,
        exclude_patterns: list[str] | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self.root = root
        self.exclude_patterns = DEFAULT_EXCLUDES + (exclude_patterns or [])
        self.on_progress = on_progress
        self.errors: list[str] = []
        self.skipped = 0

    def supports(self, file: Path) -> bool:
        """Check if this source reads the given file."""
        return file.suffix == ".php"

    def symbols(self) -> list[SourceSymbol]:
        """Scan every PHP file under the root.

        Files that cannot be read are recorded in ``errors`` and skipped.
        """
        files = sorted(f for f in self.root.rglob("*.php") if f.is_file())
        total = len(files)
        result: list[SourceSymbol] = []

        for i, file in enumerate(files):
            relative_path = str(file.relative_to(self.root))
            if self._should_exclude(relative_path):
                self.skipped += 1
            else:
                try:
                    result.extend(self.parse_file(file))
                except SourceError as e:
                    logger.warning("%s", e)
                    self.errors.append(str(e))

            if self.on_progress:
                self.on_progress(file, i + 1, total)

        return result

    def parse_file(self, file: Path) -> list[SourceSymbol]:
        """Extract the symbols declared in one file."""
        try:
            source = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceError(f"Cannot read {file}: {e}") from e
        return parse_source(source, file)

    def _should_exclude(self, path: str) -> bool:
        """Check if a path matches any exclusion pattern.

        Excludes:
        - Any path component starting with '.' (hidden files/directories)
        - Any path component matching the exclusion patterns
        - The whole relative path matching an exclusion pattern
        """
        for part in Path(path).parts:
            if part.startswith("."):
                return True
            for pattern in self.exclude_patterns:
                if fnmatch.fnmatch(part, pattern):
                    return True
        return any(fnmatch.fnmatch(path, pattern) for pattern in self.exclude_patterns)



def parse_source(source: str, file: Path | None = None) -> list[SourceSymbol]:
    """Extract the symbols declared in PHP source text.

    Syntax errors do not abort the scan: declarations that parsed are kept.
    """
    data = source.encode("utf-8")
    tree = _parser().parse(data)
    if tree.root_node.has_error:
        logger.debug("Syntax errors in %s, keeping what parsed", file or "<source>")

    visitor = _PhpVisitor(data, file)
    visitor.visit_block(tree.root_node)
    return visitor.symbols


class _PhpVisitor:
    """Collects declarations from a PHP syntax tree."""

    def __init__(self, data: bytes, file: Path | None) -> None:
        self.data = data
        self.file = file
        self.symbols: list[SourceSymbol] = []

        self._namespace = ""
        self._import_lines: list[str] = []
        self._imports: dict[str, str] = {}

    def _text(self, node: Node | None) -> str:
        if node is None:
            return ""
        return self.data[node.start_byte : node.end_byte].decode("utf-8", errors="replace").strip()

    def _doc_comment(self, node: Node) -> str | None:
        previous = node.prev_named_sibling
        if previous is None or previous.type != "comment":
            return None
        text = self._text(previous)
        if text.startswith("/**") and text != "/**/":
            return text
        return None

    def visit_block(self, node: Node) -> None:
        """Visit the statements directly inside ``node``."""
        for child in node.named_children:
            visitor = getattr(self, f"visit_{child.type}", None)
            if visitor is not None:
                visitor(child)

    def visit_ERROR(self, node: Node) -> None:
        self.visit_block(node)

    def visit_namespace_definition(self, node: Node) -> None:
        name = self._text(node.child_by_field_name("name"))
        self._namespace = names.normalize(name) if name else ""
        self._import_lines = []
        self._imports = {}

        body = node.child_by_field_name("body")
        if body is not None:
            self.visit_block(body)
            self._namespace = ""
            self._import_lines = []
            self._imports = {}

    def visit_namespace_use_declaration(self, node: Node) -> None:
        statement = self._text(node)
        if not statement.endswith(";"):
            statement += ";"
        self._import_lines.append(statement)
        for directive in parse_import_directives(statement):
            if directive.kind == "class":
                self._imports[directive.alias] = directive.path

    def visit_class_declaration(self, node: Node) -> None:
        self._class_like(node, SymbolKind.CLASS)

    def visit_interface_declaration(self, node: Node) -> None:
        self._class_like(node, SymbolKind.INTERFACE)

    def visit_trait_declaration(self, node: Node) -> None:
        self._class_like(node, SymbolKind.TRAIT)

    def visit_enum_declaration(self, node: Node) -> None:
        self._class_like(node, SymbolKind.CLASS)

    def visit_function_definition(self, node: Node) -> None:
        name = node.child_by_field_name("name")
        if name is None:
            return
        return_type = node.child_by_field_name("return_type")
        self.symbols.append(
            SourceSymbol(
                name=self._declared(self._text(name)),
                kind=SymbolKind.FUNCTION,
                file=self.file,
                line=node.start_point[0] + 1,
                import_text="\n".join(self._import_lines),
                doc_comment=self._doc_comment(node),
                parameters=self._parameters(node),
                return_type=self._text(return_type) or None,
            )
        )

    def _class_like(self, node: Node, kind: SymbolKind) -> None:
        name = node.child_by_field_name("name")
        if name is None:
            return

        symbol = SourceSymbol(
            name=self._declared(self._text(name)),
            kind=kind,
            file=self.file,
            line=node.start_point[0] + 1,
            import_text="\n".join(self._import_lines),
            doc_comment=self._doc_comment(node),
            is_abstract="abstract" in self._modifiers(node),
        )

        for child in node.named_children:
            if child.type == "base_clause":
                extended = self._names(child)
                if kind == SymbolKind.INTERFACE:
                    symbol.interfaces.extend(extended)
                elif extended:
                    symbol.parent = extended[0]
            elif child.type == "class_interface_clause":
                symbol.interfaces.extend(self._names(child))

        body = node.child_by_field_name("body")
        if body is not None:
            self._members(symbol, body)
        self.symbols.append(symbol)

    def _members(self, symbol: SourceSymbol, body: Node) -> None:
        for child in body.named_children:
            if child.type == "use_declaration":
                symbol.traits.extend(self._names(child))
            elif child.type == "const_declaration":
                self._constants(symbol, child)
            elif child.type == "property_declaration":
                self._properties(symbol, child)
            elif child.type == "method_declaration":
                self._method(symbol, child)

    def _constants(self, symbol: SourceSymbol, node: Node) -> None:
        if self._modifiers(node) & _HIDDEN:
            return
        doc = self._doc_comment(node)
        for element in node.named_children:
            if element.type != "const_element":
                continue
            name = next((c for c in element.named_children if c.type == "name"), None)
            if name is None:
                continue
            _, _, value = self._text(element).partition("=")
            symbol.constants.append(SourceConstant(self._text(name), value.strip(), doc))

    def _properties(self, symbol: SourceSymbol, node: Node) -> None:
        modifiers = self._modifiers(node)
        if modifiers & _HIDDEN or "static" in modifiers:
            return

        type_node = node.child_by_field_name("type")
        if type_node is None:
            type_node = next((c for c in node.named_children if c.type in _TYPE_NODES), None)
        type_text = self._text(type_node) or None
        doc = self._doc_comment(node)

        for element in node.named_children:
            if element.type != "property_element":
                continue
            variable = next((c for c in element.named_children if c.type == "variable_name"), None)
            if variable is None:
                continue
            _, has_default, default = self._text(element).partition("=")
            symbol.properties.append(
                SourceProperty(
                    self._text(variable).lstrip("$"),
                    type_text,
                    doc,
                    default.strip() if has_default else None,
                )
            )

    def _method(self, symbol: SourceSymbol, node: Node) -> None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return
        parameters = self._parameters(node)

        for param in parameters:
            if param.promoted == "public":
                symbol.properties.append(SourceProperty(param.name, param.type, None, None))

        name = self._text(name_node)
        modifiers = self._modifiers(node)
        if modifiers & _HIDDEN:
            return
        if name.startswith("__") and name.lower() != "__construct":
            return

        return_type = node.child_by_field_name("return_type")
        symbol.methods.append(
            SourceMethod(
                name=name,
                declaring=symbol.name,
                doc_comment=self._doc_comment(node),
                parameters=parameters,
                return_type=self._text(return_type) or None,
                is_static="static" in modifiers,
                is_abstract="abstract" in modifiers or symbol.kind == SymbolKind.INTERFACE,
                line=node.start_point[0] + 1,
            )
        )

    def _parameters(self, node: Node) -> list[SourceParameter]:
        formal = node.child_by_field_name("parameters")
        if formal is None:
            return []

        result = []
        for param in formal.named_children:
            if param.type not in _PARAMETER_NODES:
                continue
            name = self._text(param.child_by_field_name("name"))
            if not name:
                continue

            by_reference = name.startswith("&") or any(
                c.type == "reference_modifier" for c in param.children
            )
            promoted = None
            if param.type == "property_promotion_parameter":
                visibility = next(
                    (c for c in param.named_children if c.type == "visibility_modifier"), None
                )
                promoted = self._text(visibility).lower() or "public"

            default = param.child_by_field_name("default_value")
            result.append(
                SourceParameter(
                    name=name.lstrip("&").strip().lstrip("$"),
                    type=self._text(param.child_by_field_name("type")) or None,
                    default=self._text(default) if default is not None else None,
                    variadic=param.type == "variadic_parameter",
                    by_reference=by_reference,
                    promoted=promoted,
                )
            )
        return result

    def _modifiers(self, node: Node) -> set[str]:
        return {
            self._text(child).lower()
            for child in node.named_children
            if child.type.endswith("_modifier")
        }

    def _names(self, node: Node) -> list[str]:
        return [
            self._qualify(self._text(child))
            for child in node.named_children
            if child.type in _NAME_NODES
        ]

    def _declared(self, name: str) -> str:
        if self._namespace:
            return f"{self._namespace}{names.SEPARATOR}{name}"
        return names.normalize(name)

    def _qualify(self, name: str) -> str:
        return names.qualify(name, self._namespace, self._imports)

"""MCP server implementation for Refdoc."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from refdoc.config import load_config
from refdoc.core.builder import DocBuilder, Project
from refdoc.core.exceptions import RefdocError
from refdoc.core.models import SymbolKind
from refdoc.docs import Document

logger = logging.getLogger(__name__)

server = Server("refdoc")

_projects: dict[Path, Project] = {}


def _get_project() -> Project:
    """Build (once) the project in the current directory."""
    root = Path.cwd()
    if root not in _projects:
        logger.info("Building project at %s", root)
        _projects[root] = DocBuilder(load_config(root)).build()
    return _projects[root]


def _document_to_dict(document: Document) -> dict[str, Any]:
    """Convert a Document to a JSON-serializable dict."""
    return {
        "name": document.name,
        "kind": document.kind.value,
        "title": document.record.title,
        "page": document.page,
    }


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="refdoc_resolve",
            description=(
                "Resolve a PHP docblock type annotation as written inside a symbol. "
                "Short names are expanded through the symbol's imports and namespace "
                "siblings. Returns the resolved text and every referenced name."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "symbol": {
                        "type": "string",
                        "description": "Fully-qualified symbol whose imports apply",
                    },
                    "type": {
                        "type": "string",
                        "description": "Type annotation, e.g. 'array<int, User>|null'",
                    },
                },
                "required": ["symbol", "type"],
            },
        ),
        Tool(
            name="refdoc_link",
            description=(
                "Relative Markdown link from one symbol's page to another's. "
                "Returns null when the target has no page."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "from": {"type": "string", "description": "Symbol whose page links"},
                    "to": {"type": "string", "description": "Symbol being linked to"},
                },
                "required": ["from", "to"],
            },
        ),
        Tool(
            name="refdoc_find",
            description="Search documented symbols by name. Supports partial matching.",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "Search query (partial name match)",
                    },
                    "kind": {
                        "type": "string",
                        "enum": ["class", "interface", "trait", "function"],
                        "description": "Filter by symbol kind (optional)",
                    },
                },
                "required": ["query"],
            },
        ),
        Tool(
            name="refdoc_stats",
            description="Get statistics about the documented project.",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
    ]


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "refdoc_resolve":
            result = _handle_resolve(arguments["symbol"], arguments["type"])
        elif name == "refdoc_link":
            result = _handle_link(arguments["from"], arguments["to"])
        elif name == "refdoc_find":
            result = _handle_find(arguments["query"], arguments.get("kind"))
        elif name == "refdoc_stats":
            result = _handle_stats()
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except (RefdocError, KeyError, ValueError) as e:
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]


def _handle_resolve(symbol: str, type_text: str) -> dict[str, Any]:
    """Handle refdoc_resolve tool."""
    project = _get_project()
    resolution = project.resolve(symbol, type_text)
    return {
        "text": resolution.text,
        "references": [
            {"name": reference, "known": project.is_known(reference)}
            for reference in resolution.references
        ],
    }


def _handle_link(from_name: str, to_name: str) -> dict[str, Any]:
    """Handle refdoc_link tool."""
    project = _get_project()
    return {
        "from": from_name,
        "to": to_name,
        "link": project.link_path(from_name, to_name),
        "title": project.title_of(to_name),
    }


def _handle_find(query: str, kind: str | None) -> dict[str, Any]:
    """Handle refdoc_find tool."""
    kind_filter = SymbolKind(kind) if kind else None
    documents = _get_project().find(query, kind_filter)
    return {"results": [_document_to_dict(d) for d in documents]}


def _handle_stats() -> dict[str, Any]:
    """Handle refdoc_stats tool."""
    return _get_project().stats.as_dict()


async def serve() -> None:
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())

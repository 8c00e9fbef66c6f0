"""
MCP server for Refdoc.

Exposes type resolution and page linking to LLMs via the Model Context
Protocol.

Tools:
    - refdoc_resolve: Resolve a type annotation as written inside a symbol
    - refdoc_link: Relative link between two symbol pages
    - refdoc_find: Search documented symbols
    - refdoc_stats: Build statistics for the project

Usage:
    Install: pip install refdoc
    Run: refdoc-mcp (from the project root)
"""

import asyncio

from refdoc.mcp.server import serve as _serve


def serve() -> None:
    """Entry point for the MCP server."""
    asyncio.run(_serve())


__all__ = ["serve"]

"""
Core module: data models, exceptions, alias tables and resolution.

This module provides the foundational types of the resolution pipeline:

Models (models.py):
    - Symbol: A documented class, interface, trait, function or method
    - SymbolKind: Enum for categorization
    - BuildStats: Counters reported by a build

Exceptions (exceptions.py):
    - RefdocError: Base exception for all refdoc errors
    - SourceError: Source file or manifest could not be read
    - ConfigError: Project configuration is malformed
    - SymbolNotFoundError: Requested symbol doesn't exist

Resolution:
    - AliasTableBuilder (aliases.py): per-symbol short name maps
    - TypeResolver (resolution.py): resolves annotations for a symbol
    - ReferenceGraph (graph/): known symbols and relative page links

The builder (builder.py) ties these together and is imported directly:
``from refdoc.core.builder import DocBuilder``.
"""

from refdoc.core.aliases import AliasTable, AliasTableBuilder, merge_sibling_defaults
from refdoc.core.exceptions import (
    ConfigError,
    RefdocError,
    SourceError,
    SymbolNotFoundError,
)
from refdoc.core.graph import ReferenceGraph, link_path
from refdoc.core.models import BuildStats, Symbol, SymbolKind
from refdoc.core.resolution import Resolution, TypeResolver, is_linkable

__all__ = [
    # Models
    "Symbol",
    "SymbolKind",
    "BuildStats",
    # Exceptions
    "RefdocError",
    "SourceError",
    "ConfigError",
    "SymbolNotFoundError",
    # Resolution
    "AliasTable",
    "AliasTableBuilder",
    "merge_sibling_defaults",
    "TypeResolver",
    "Resolution",
    "is_linkable",
    "ReferenceGraph",
    "link_path",
]

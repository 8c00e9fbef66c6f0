"""
Symbol sources: Discover documented symbols and their doc comments.

Components:
    - SymbolSource: Protocol every source implements
    - PhpSource: Scans a directory of PHP files
    - ManifestSource: Loads pre-extracted symbols from a JSON manifest
    - SourceSymbol: Discovered class, interface, trait or function

Docblocks:
    - parse_docblock(): Split a ``/** ... */`` comment into title,
      description and tags
    - DocBlock: Parsed comment with tag helpers (@param, @return, @var,
      @property, @see, @author)

Adding a new source:
    1. Create a class with a symbols() method returning SourceSymbols
    2. Fill import_text with the raw import directives in scope, so alias
       tables can be built from it
"""

from refdoc.sources.base import SymbolSource
from refdoc.sources.docblock import DocBlock, DocTag, ParamTag, ReturnTag, VarTag, parse_docblock
from refdoc.sources.manifest import ManifestSource
from refdoc.sources.models import (
    SourceConstant,
    SourceMethod,
    SourceParameter,
    SourceProperty,
    SourceSymbol,
)
from refdoc.sources.php import PhpSource, parse_source

__all__ = [
    "SymbolSource",
    "PhpSource",
    "ManifestSource",
    "parse_source",
    # Models
    "SourceSymbol",
    "SourceMethod",
    "SourceParameter",
    "SourceProperty",
    "SourceConstant",
    # Docblocks
    "DocBlock",
    "DocTag",
    "ParamTag",
    "ReturnTag",
    "VarTag",
    "parse_docblock",
]

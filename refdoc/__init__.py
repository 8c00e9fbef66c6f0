"""
Refdoc: Cross-linked Markdown reference pages for PHP projects.

Refdoc reads the docblocks of a PHP codebase and:
- Resolves the type annotations they carry (generics, unions, array shapes,
  callables) against each symbol's imports
- Records every referenced symbol in a cross-reference graph
- Renders one page per class, interface, trait and function, plus an index

Usage:
    from pathlib import Path

    from refdoc.config import load_config
    from refdoc.core.builder import DocBuilder
    from refdoc.sources import PhpSource

    config = load_config(Path("."))
    builder = DocBuilder(config)
    project = builder.build(PhpSource(Path("src")))
    builder.write(project)
"""

__version__ = "0.1.0"

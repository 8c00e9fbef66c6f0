"""
Documents: page models, assembly, Markdown rendering and writing.

Models (models.py):
    - Document: one page, tagged by symbol kind
    - DocRecord: title, description, see-also and authors shared by all pages
    - MethodDoc / Signature / Parameter / Property / Constant

Assembly (assembler.py):
    - DocumentAssembler: resolves types through the alias tables and records
      references in the graph while building documents

Output:
    - MarkdownRenderer: pages with YAML front matter, plus the index page
    - PageWriter: writes pages below the output directory
"""

from refdoc.docs.assembler import DocumentAssembler
from refdoc.docs.markdown import MarkdownRenderer, render_front_matter
from refdoc.docs.models import (
    Constant,
    DocRecord,
    Document,
    MethodDoc,
    Parameter,
    Property,
    SeeAlso,
    Signature,
    make_anchor,
)
from refdoc.docs.writer import PageWriter

__all__ = [
    "Document",
    "DocRecord",
    "SeeAlso",
    "MethodDoc",
    "Signature",
    "Parameter",
    "Property",
    "Constant",
    "make_anchor",
    "DocumentAssembler",
    "MarkdownRenderer",
    "render_front_matter",
    "PageWriter",
]

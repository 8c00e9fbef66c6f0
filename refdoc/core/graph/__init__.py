"""
Reference graph and page linking.

Data Structures:
    - ReferenceGraph: known symbols, titles and reference edges

Linking:
    - link_path(): relative link between two symbol pages
    - page_path(): output path of a symbol page
    - index_link(): relative link from a page back to the index
"""

from refdoc.core.graph.base import ReferenceGraph
from refdoc.core.graph.linking import INDEX_PAGE, index_link, link_path, page_path

__all__ = [
    "ReferenceGraph",
    "INDEX_PAGE",
    "index_link",
    "link_path",
    "page_path",
]

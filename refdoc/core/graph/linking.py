"""Relative links between generated pages.

Pages mirror the namespace tree: ``\\App\\Model\\User`` lives at
``App/Model/User.md`` and the index at ``index.md``. Everything here is a
pure function of names; nothing touches the filesystem.
"""

from __future__ import annotations

from refdoc.core import names

PAGE_SUFFIX = ".md"
INDEX_PAGE = "index.md"


def page_path(name: str) -> str:
    """Output path of a symbol's page, relative to the output root."""
    return "/".join(names.segments(name)) + PAGE_SUFFIX


def index_link(name: str) -> str:
    """Relative link from a symbol's page back to the index page."""
    depth = len(names.segments(name)) - 1
    return "../" * max(depth, 0) + INDEX_PAGE


def link_path(from_name: str, to_name: str) -> str | None:
    """Relative link from one symbol's page to another's.

    Drops the longest common namespace prefix, climbs one level for every
    namespace segment of the source left over, then descends into the target.
    Root-level targets have no page directory of their own and are not linked.
    """
    target = names.segments(to_name)
    if len(target) < 2:
        return None

    source_ns = names.segments(from_name)[:-1]
    target_ns = target[:-1]

    shared = 0
    for left, right in zip(source_ns, target_ns):
        if left != right:
            break
        shared += 1

    parts = [".."] * (len(source_ns) - shared) + target[shared:]
    return "/".join(parts) + PAGE_SUFFIX

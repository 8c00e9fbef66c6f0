"""Bracket-aware splitting of type annotation text."""

from __future__ import annotations

_OPENERS = "(<{"
_CLOSERS = ")>}"


def split_top_level(separator: str, text: str) -> list[str]:
    """Split on ``separator`` wherever it is not nested inside brackets.

    All bracket kinds share one depth counter. Parts are stripped.
    """
    parts = [""]
    depth = 0
    for char in text:
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
        elif char == separator and not depth:
            parts.append("")
            continue
        parts[-1] += char
    return [part.strip() for part in parts]


def matching_close(text: str, open_index: int) -> int | None:
    """Index of the bracket closing the one at ``open_index``, if any."""
    depth = 0
    for index in range(open_index, len(text)):
        char = text[index]
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
            if depth == 0:
                return index
    return None


def matching_open(text: str, close_index: int) -> int | None:
    """Index of the bracket opening the one at ``close_index``, if any."""
    depth = 0
    for index in range(close_index, -1, -1):
        char = text[index]
        if char in _CLOSERS:
            depth += 1
        elif char in _OPENERS:
            depth -= 1
            if depth == 0:
                return index
    return None

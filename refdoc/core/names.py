"""Helpers for backslash-segmented symbol names."""

from __future__ import annotations

SEPARATOR = "\\"


def normalize(name: str) -> str:
    """Give a fully-qualified name its leading separator."""
    name = name.strip()
    if not name or name.startswith(SEPARATOR):
        return name
    return SEPARATOR + name


def segments(name: str) -> list[str]:
    """Split a name into its namespace segments plus basename."""
    return [part for part in name.split(SEPARATOR) if part]


def namespace_of(name: str) -> str:
    """All segments but the last, with a leading separator ("" at the root)."""
    parts = segments(name)
    if len(parts) < 2:
        return ""
    return SEPARATOR + SEPARATOR.join(parts[:-1])


def basename(name: str) -> str:
    """The last segment of a name."""
    parts = segments(name)
    return parts[-1] if parts else ""


def qualify(name: str, namespace: str, imports: dict[str, str] | None = None) -> str:
    """Resolve a class name as written in source to its fully-qualified form.

    Follows the language rules: a leading separator means fully qualified;
    otherwise the first segment is looked up among the file's imports; failing
    that the name is relative to the current namespace.
    """
    name = name.strip()
    if name.startswith(SEPARATOR):
        return name
    head, _, rest = name.partition(SEPARATOR)
    if imports and head in imports:
        resolved = imports[head]
        return f"{resolved}{SEPARATOR}{rest}" if rest else resolved
    if namespace:
        return normalize(f"{namespace}{SEPARATOR}{name}")
    return normalize(name)

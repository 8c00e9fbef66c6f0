"""Docblock parser: summary, description and tags of a ``/** ... */`` comment."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_TAG_LINE = re.compile(r"^@([\w-]+(?:\\[\w-]+)*)(?:\s+(.*))?$", re.DOTALL)
_VARIABLE = re.compile(r"^(&)?(\.\.\.)?(\$\w+)\s*(.*)$", re.DOTALL)
_WHITESPACE = re.compile(r"\s+")

_OPENERS = "(<{["
_CLOSERS = ")>}]"

PARAM_TAGS = ("param", "psalm-param", "phpstan-param")
RETURN_TAGS = ("return", "psalm-return", "phpstan-return")
VAR_TAGS = ("var", "psalm-var", "phpstan-var")
PROPERTY_TAGS = ("property", "property-read", "property-write")
IGNORE_TAGS = ("internal", "deprecated")


@dataclass
class DocTag:
    """A raw ``@name value`` tag."""

    name: str
    value: str = ""


@dataclass
class ParamTag:
    type: str | None
    name: str
    description: str = ""
    variadic: bool = False


@dataclass
class ReturnTag:
    type: str
    description: str = ""


@dataclass
class VarTag:
    type: str
    name: str | None = None
    description: str = ""


@dataclass
class DocBlock:
    """A parsed docblock.

    ``title`` is the first line of free text, ``description`` the rest.
    """

    title: str = ""
    description: str = ""
    tags: list[DocTag] = field(default_factory=list)

    def tags_named(self, *tag_names: str) -> list[DocTag]:
        return [tag for tag in self.tags if tag.name in tag_names]

    def has_tag(self, *tag_names: str) -> bool:
        return any(tag.name in tag_names for tag in self.tags)

    @property
    def ignored(self) -> bool:
        """Marked ``@internal`` or ``@deprecated``."""
        return self.has_tag(*IGNORE_TAGS)

    def params(self) -> dict[str, ParamTag]:
        """Parameter tags by name; psalm/phpstan variants override plain ones."""
        result: dict[str, ParamTag] = {}
        for tag_name in PARAM_TAGS:
            for tag in self.tags_named(tag_name):
                param = parse_param_tag(tag.value)
                if param is not None:
                    result[param.name] = param
        return result

    def return_tag(self) -> ReturnTag | None:
        result = None
        for tag_name in RETURN_TAGS:
            for tag in self.tags_named(tag_name):
                type_text, description = split_type(tag.value)
                if type_text:
                    result = ReturnTag(type_text, description)
        return result

    def var_tag(self) -> VarTag | None:
        result = None
        for tag_name in VAR_TAGS:
            for tag in self.tags_named(tag_name):
                var = parse_var_tag(tag.value)
                if var is not None:
                    result = var
        return result

    def property_tags(self) -> list[VarTag]:
        result = []
        for tag in self.tags_named(*PROPERTY_TAGS):
            prop = parse_var_tag(tag.value)
            if prop is not None and prop.name:
                result.append(prop)
        return result

    def see_also(self) -> list[str]:
        return [tag.value for tag in self.tags_named("see") if tag.value]

    def authors(self) -> list[str]:
        return [tag.value for tag in self.tags_named("author") if tag.value]


def parse_docblock(text: str | None) -> DocBlock:
    """Parse a docblock comment. ``None`` or empty text gives an empty block."""
    if not text:
        return DocBlock()

    lines = _comment_lines(text)

    free_text: list[str] = []
    tags: list[DocTag] = []
    for line in lines:
        stripped = line.strip()
        match = _TAG_LINE.match(stripped)
        if match:
            tags.append(DocTag(match.group(1), (match.group(2) or "").strip()))
        elif tags:
            # Text after a tag continues that tag's value.
            if stripped:
                tag = tags[-1]
                tag.value = f"{tag.value}\n{stripped}" if tag.value else stripped
        else:
            free_text.append(line.rstrip())

    body = "\n".join(free_text).strip()
    title, _, description = body.partition("\n")
    return DocBlock(title=title.strip(), description=description.strip(), tags=tags)


def _comment_lines(text: str) -> list[str]:
    text = text.strip()
    if text.startswith("/**"):
        text = text[3:]
    elif text.startswith("/*"):
        text = text[2:]
    if text.endswith("*/"):
        text = text[:-2]

    lines = []
    for line in text.splitlines():
        line = line.strip()
        if line.startswith("*"):
            line = line[1:]
            if line.startswith(" "):
                line = line[1:]
        lines.append(line)
    return lines


def split_type(value: str) -> tuple[str, str]:
    """Split a tag value into its leading type and the remainder.

    Whitespace ends the type only outside brackets and not next to a ``|``
    or ``&``, nor between a callable's ``)`` and its ``:`` return type.
    """
    value = value.strip()
    depth = 0
    index = 0
    while index < len(value):
        char = value[index]
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
        elif char.isspace() and depth <= 0:
            before = value[:index].rstrip()
            after = value[index:].lstrip()
            joined = (
                after.startswith("|")
                or (after.startswith("&") and not after[1:].lstrip().startswith(("$", "...")))
                or before.endswith(("|", "&", ":"))
                or (before.endswith(")") and after.startswith(":"))
            )
            if not joined:
                break
        index += 1
    return _WHITESPACE.sub(" ", value[:index]).strip(), value[index:].strip()


def parse_param_tag(value: str) -> ParamTag | None:
    """Parse ``[Type] [&][...]$name [description]``."""
    value = value.strip()
    type_text: str | None = None
    if not value.startswith(("$", "&", "...")):
        type_text, value = split_type(value)

    match = _VARIABLE.match(value)
    if not match:
        return None
    _, dots, variable, description = match.groups()
    return ParamTag(
        type=type_text or None,
        name=variable[1:],
        description=description.strip(),
        variadic=bool(dots),
    )


def parse_var_tag(value: str) -> VarTag | None:
    """Parse ``Type [$name] [description]``."""
    type_text, rest = split_type(value)
    if not type_text or type_text.startswith("$"):
        return None
    match = _VARIABLE.match(rest)
    if match:
        _, _, variable, description = match.groups()
        return VarTag(type_text, variable[1:], description.strip())
    return VarTag(type_text, None, rest)

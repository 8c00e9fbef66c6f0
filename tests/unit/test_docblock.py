"""Unit tests for docblock parsing."""

import pytest

from refdoc.sources.docblock import parse_docblock, parse_param_tag, split_type

CLASS_DOC = """/**
 * Shopping cart.
 *
 * Holds line items until checkout.
 * Survives page reloads.
 *
 * @author Jane Doe <jane@example.com>
 * @see Checkout
 * @property-read array<string, Item> $items Items by SKU
 */"""


class TestParseDocblock:
    """Tests for title, description and tags."""

    def test_title_and_description(self) -> None:
        doc = parse_docblock(CLASS_DOC)
        assert doc.title == "Shopping cart."
        assert doc.description == "Holds line items until checkout.\nSurvives page reloads."

    def test_tags(self) -> None:
        doc = parse_docblock(CLASS_DOC)
        assert [t.name for t in doc.tags] == ["author", "see", "property-read"]
        assert doc.authors() == ["Jane Doe <jane@example.com>"]
        assert doc.see_also() == ["Checkout"]

    def test_property_tags(self) -> None:
        props = parse_docblock(CLASS_DOC).property_tags()
        assert len(props) == 1
        assert props[0].type == "array<string, Item>"
        assert props[0].name == "items"
        assert props[0].description == "Items by SKU"

    def test_empty(self) -> None:
        for text in (None, "", "/** */"):
            doc = parse_docblock(text)
            assert doc.title == ""
            assert doc.tags == []

    def test_single_line(self) -> None:
        assert parse_docblock("/** Adds numbers. */").title == "Adds numbers."

    def test_ignored(self) -> None:
        assert parse_docblock("/** @internal */").ignored
        assert parse_docblock("/**\n * Old.\n * @deprecated use New\n */").ignored
        assert not parse_docblock("/** Fine. */").ignored

    def test_multiline_tag_value(self) -> None:
        doc = parse_docblock(
            "/**\n * @param array{\n *   id: int,\n *   name: string\n * } $row The row\n */"
        )
        param = doc.params()["row"]
        assert param.type == "array{ id: int, name: string }"
        assert param.description == "The row"


class TestParamTags:
    """Tests for @param and @return helpers."""

    def test_param_with_spaces_in_type(self) -> None:
        param = parse_param_tag("array<int, Foo> $items The items")
        assert param is not None
        assert param.type == "array<int, Foo>"
        assert param.name == "items"
        assert param.description == "The items"

    def test_variadic(self) -> None:
        param = parse_param_tag("string ...$parts")
        assert param is not None
        assert param.variadic
        assert param.name == "parts"

    def test_untyped(self) -> None:
        param = parse_param_tag("$value Some value")
        assert param is not None
        assert param.type is None
        assert param.name == "value"

    def test_missing_variable(self) -> None:
        assert parse_param_tag("int") is None

    def test_psalm_overrides_plain(self) -> None:
        doc = parse_docblock(
            "/**\n * @param array $ids Ids\n * @psalm-param list<int> $ids\n */"
        )
        assert doc.params()["ids"].type == "list<int>"

    def test_return(self) -> None:
        doc = parse_docblock("/**\n * @return Foo|null The foo, if any\n */")
        tag = doc.return_tag()
        assert tag is not None
        assert tag.type == "Foo|null"
        assert tag.description == "The foo, if any"

    def test_var(self) -> None:
        tag = parse_docblock("/** @var list<Item> */").var_tag()
        assert tag is not None
        assert tag.type == "list<Item>"
        assert tag.name is None


class TestSplitType:
    """Tests for splitting a tag value into type and remainder."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Foo rest", ("Foo", "rest")),
            ("array<int, Foo> rest", ("array<int, Foo>", "rest")),
            ("Foo | Bar rest", ("Foo | Bar", "rest")),
            ("callable(int) : void rest", ("callable(int) : void", "rest")),
            ("array{a: int, b: string} rest", ("array{a: int, b: string}", "rest")),
            ("Foo &$bar", ("Foo", "&$bar")),
            ("Foo", ("Foo", "")),
        ],
    )
    def test_split(self, value: str, expected: tuple[str, str]) -> None:
        assert split_type(value) == expected

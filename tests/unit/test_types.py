"""Unit tests for type expression parsing and resolution."""

import pytest

from refdoc.core.types import (
    ArrayShape,
    ArraySuffix,
    Atom,
    Callable,
    Generic,
    Nullable,
    Parenthesized,
    Union,
    is_scalar,
    parse_type,
    resolve_type,
    split_top_level,
)

ALIASES = {
    "Foo": "\\App\\Foo",
    "\\Foo": "\\App\\Foo",
    "Bar": "\\App\\Bar",
    "\\Bar": "\\App\\Bar",
    "Baz": "App\\Baz",
}


class TestSplitTopLevel:
    """Tests for bracket-aware splitting."""

    def test_nested_commas_do_not_split(self) -> None:
        parts = split_top_level(",", "a: Foo<X,Y>, b: Bar")
        assert parts == ["a: Foo<X,Y>", "b: Bar"]

    def test_shape_interior(self) -> None:
        text = "array{a: Foo<X,Y>, b: Bar}"
        interior = text[len("array{") : -1]
        assert len(split_top_level(",", interior)) == 2

    def test_union_inside_generic_is_kept(self) -> None:
        assert split_top_level("|", "Foo<A|B>|null") == ["Foo<A|B>", "null"]

    def test_parts_are_stripped(self) -> None:
        assert split_top_level("|", " int |  string ") == ["int", "string"]

    def test_no_separator(self) -> None:
        assert split_top_level(",", "Foo") == ["Foo"]

    def test_trailing_separator_gives_empty_part(self) -> None:
        assert split_top_level(",", "a, b,") == ["a", "b", ""]


class TestParseType:
    """Tests for the recursive-descent parser."""

    def test_atom(self) -> None:
        assert parse_type("Foo") == Atom("Foo")

    def test_array_suffix_repeats(self) -> None:
        assert parse_type("Foo[][]") == ArraySuffix(ArraySuffix(Atom("Foo")))

    def test_nullable(self) -> None:
        assert parse_type("?Foo") == Nullable(Atom("Foo"))

    def test_union(self) -> None:
        assert parse_type("Foo|null") == Union([Atom("Foo"), Atom("null")])

    def test_parenthesized_union_with_suffix(self) -> None:
        expr = parse_type("(Foo|Bar)[]")
        assert expr == ArraySuffix(Parenthesized(Union([Atom("Foo"), Atom("Bar")])))

    def test_parentheses_not_enclosing_whole_span(self) -> None:
        expr = parse_type("(A)|(B)")
        assert isinstance(expr, Union)
        assert len(expr.alternatives) == 2

    def test_generic(self) -> None:
        expr = parse_type("array<int, Foo>")
        assert expr == Generic(Atom("array"), [Atom("int"), Atom("Foo")])

    def test_nested_generic(self) -> None:
        expr = parse_type("Collection<string, list<Foo>>")
        assert isinstance(expr, Generic)
        assert expr.args[1] == Generic(Atom("list"), [Atom("Foo")])

    def test_callable(self) -> None:
        assert parse_type("callable(Foo)") == Callable(Atom("Foo"))

    def test_callable_without_params(self) -> None:
        assert parse_type("callable()") == Callable()

    def test_callable_with_return(self) -> None:
        assert parse_type("callable(Foo): Bar") == Callable(Atom("Foo"), Atom("Bar"))

    def test_array_shape(self) -> None:
        expr = parse_type("array{id: int, rel?: Foo, Bar}")
        assert expr == ArrayShape(
            [("id", Atom("int")), ("rel?", Atom("Foo")), (None, Atom("Bar"))]
        )

    def test_array_shape_drops_trailing_comma(self) -> None:
        expr = parse_type("array{id: int,}")
        assert expr == ArrayShape([("id", Atom("int"))])

    def test_array_shape_class_constant_is_not_a_key(self) -> None:
        expr = parse_type("array{Foo::BAR}")
        assert expr == ArrayShape([(None, Atom("Foo::BAR"))])

    def test_render_round_trip(self) -> None:
        text = "?array{id: int, rel: Bar<Baz>}"
        assert parse_type(text).render() == text

    def test_atoms_in_order(self) -> None:
        expr = parse_type("Map<Foo, Bar>|Baz")
        assert [a.name for a in expr.atoms()] == ["Map", "Foo", "Bar", "Baz"]

    def test_unbalanced_text_is_an_atom(self) -> None:
        assert parse_type("Foo<Bar") == Atom("Foo<Bar")


class TestResolveType:
    """Tests for alias substitution."""

    def test_fully_qualified_atom_unchanged(self) -> None:
        assert resolve_type("\\Vendor\\Thing", {}) == ("\\Vendor\\Thing", ["\\Vendor\\Thing"])

    def test_alias_hit(self) -> None:
        assert resolve_type("Foo", ALIASES) == ("\\App\\Foo", ["\\App\\Foo"])

    def test_alias_miss_passes_through(self) -> None:
        assert resolve_type("Unknown", ALIASES) == ("Unknown", ["Unknown"])

    def test_namespaced_result_gains_leading_separator(self) -> None:
        assert resolve_type("Baz", ALIASES)[0] == "\\App\\Baz"

    def test_namespaced_miss_gains_leading_separator(self) -> None:
        assert resolve_type("Vendor\\Thing", {})[0] == "\\Vendor\\Thing"

    def test_scalar_unchanged(self) -> None:
        assert resolve_type("int", {"int": "\\App\\Int"}) == ("int", ["int"])

    def test_imported_class_named_like_a_pseudo_type(self) -> None:
        aliases = {"Scalar": "\\App\\Types\\Scalar", "Numeric": "\\App\\Types\\Numeric"}
        text, refs = resolve_type("Scalar|Numeric", aliases)
        assert text == "\\App\\Types\\Scalar|\\App\\Types\\Numeric"
        assert refs == ["\\App\\Types\\Scalar", "\\App\\Types\\Numeric"]

    @pytest.mark.parametrize("text", ["Foo", "?Foo", "Foo|Bar", "array<int, Foo>", "int"])
    def test_array_suffix_commutes(self, text: str) -> None:
        plain, plain_refs = resolve_type(text, ALIASES)
        suffixed, suffixed_refs = resolve_type(text + "[]", ALIASES)
        assert suffixed == plain + "[]"
        assert suffixed_refs == plain_refs

    @pytest.mark.parametrize(
        ("left", "right"),
        [("Foo", "Bar"), ("Foo<Bar>", "int"), ("array{a: Foo}", "?Bar")],
    )
    def test_union_references_concatenate(self, left: str, right: str) -> None:
        _, left_refs = resolve_type(left, ALIASES)
        _, right_refs = resolve_type(right, ALIASES)
        _, refs = resolve_type(f"{left}|{right}", ALIASES)
        assert refs == left_refs + right_refs

    def test_generic_references_main_first(self) -> None:
        text, refs = resolve_type("Foo<Bar, int>", ALIASES)
        assert text == "\\App\\Foo<\\App\\Bar, int>"
        assert refs == ["\\App\\Foo", "\\App\\Bar", "int"]

    def test_callable_with_return(self) -> None:
        text, refs = resolve_type("callable(Foo): Bar", ALIASES)
        assert text == "callable(\\App\\Foo): \\App\\Bar"
        assert refs == ["\\App\\Foo", "\\App\\Bar"]

    def test_end_to_end_nullable_shape(self) -> None:
        text, refs = resolve_type("?array{id: int, rel: Bar<Baz>}", {"Bar": "\\App\\Bar"})
        assert text == "?array{id: int, rel: \\App\\Bar<Baz>}"
        assert "\\App\\Bar" in refs
        assert "Baz" in refs

    def test_whitespace_is_normalized(self) -> None:
        assert resolve_type("  Foo | null ", ALIASES)[0] == "\\App\\Foo|null"

    def test_empty_text_raises(self) -> None:
        with pytest.raises(ValueError):
            resolve_type("   ", ALIASES)


class TestScalars:
    """Tests for the scalar set."""

    @pytest.mark.parametrize("name", ["int", "class-string", "$this", "never", "scalar"])
    def test_scalars(self, name: str) -> None:
        assert is_scalar(name)

    @pytest.mark.parametrize("name", ["Foo", "\\int", "Closure", "INT", "Scalar"])
    def test_not_scalars(self, name: str) -> None:
        assert not is_scalar(name)

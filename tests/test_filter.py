"""Tests for the filter expression builder."""

import pytest

from vectordb_sdk.documents.filter import (
    And,
    Compare,
    Eq,
    Exclude,
    Filter,
    In,
    Include,
    IncludeAll,
    Ne,
    Not,
    NotIn,
    Or,
    Range,
    Raw,
    render_filter,
)
from vectordb_sdk.exceptions import FilterError


class TestConditions:
    """Tests for leaf conditions."""

    def test_equality(self) -> None:
        """Strings are quoted, numbers are bare."""
        assert Eq("author", "jerry").render() == 'author="jerry"'
        assert Eq("page", 21).render() == "page=21"
        assert Ne("page", 2.5).render() == "page!=2.5"

    def test_string_escaping(self) -> None:
        """Quotes inside strings are escaped."""
        assert Eq("title", 'say "hi"').render() == 'title="say \\"hi\\""'

    def test_non_ascii_kept(self) -> None:
        """Non-ASCII text is rendered as-is."""
        assert Eq("bookName", "西游记").render() == 'bookName="西游记"'

    def test_compare(self) -> None:
        """Comparison operators render inline."""
        assert Compare("page", ">", 100).render() == "page>100"
        assert Compare("page", "<=", 5).render() == "page<=5"

    def test_compare_rejects_unknown_operator(self) -> None:
        """Only >, >=, <, <= are accepted."""
        with pytest.raises(FilterError):
            Compare("page", "=>", 1)

    def test_membership(self) -> None:
        """Membership operators list their values."""
        assert In("bookName", ["a", "b"]).render() == 'bookName in ("a","b")'
        assert NotIn("page", (1, 2)).render() == "page not in (1,2)"
        assert Include("tags", ["x"]).render() == 'tags include ("x")'
        assert Exclude("tags", ["x"]).render() == 'tags exclude ("x")'
        assert IncludeAll("tags", ["x", "y"]).render() == 'tags include all ("x","y")'

    def test_empty_membership_rejected(self) -> None:
        """An empty operand set is a construction error."""
        with pytest.raises(FilterError):
            In("bookName", [])

    def test_string_operand_set_rejected(self) -> None:
        """A bare string is not a value collection."""
        with pytest.raises(FilterError):
            In("bookName", "abc")

    @pytest.mark.parametrize("value", [True, None, [1], {"a": 1}])
    def test_bad_operands_rejected(self, value: object) -> None:
        """Operands must be str, int or float."""
        with pytest.raises(FilterError):
            Eq("page", value)  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_operands_rejected(self, value: float) -> None:
        """NaN and infinity have no literal in the filter syntax."""
        with pytest.raises(FilterError):
            Eq("x", value)
        with pytest.raises(FilterError):
            Range("x", upper=value)
        with pytest.raises(FilterError):
            In("x", [1.0, value])

    def test_empty_key_rejected(self) -> None:
        """Keys must be non-empty."""
        with pytest.raises(FilterError):
            Eq(" ", 1)

    def test_conditions_are_hashable_values(self) -> None:
        """Equal trees compare equal."""
        assert In("a", [1, 2]) == In("a", (1, 2))
        assert In("a", [1]) != NotIn("a", [1])
        assert hash(Eq("a", 1)) == hash(Eq("a", 1))


class TestRange:
    """Tests for range conditions."""

    def test_two_sided_default_bounds(self) -> None:
        """Lower bound inclusive, upper exclusive."""
        assert Range("page", 1, 10).render() == "page>=1 and page<10"

    def test_inclusive_upper(self) -> None:
        """Bounds inclusivity can be changed."""
        rendered = Range("page", 1, 10, include_lower=False, include_upper=True).render()
        assert rendered == "page>1 and page<=10"

    def test_one_sided(self) -> None:
        """A single bound renders one comparison."""
        assert Range("page", upper=10).render() == "page<10"
        assert Range("name", lower="m").render() == 'name>="m"'

    def test_needs_a_bound(self) -> None:
        """A range without bounds is rejected."""
        with pytest.raises(FilterError):
            Range("page")

    def test_inverted_bounds_rejected(self) -> None:
        """Lower above upper is rejected."""
        with pytest.raises(FilterError):
            Range("page", 10, 1)

    def test_mixed_bound_types_rejected(self) -> None:
        """Bounds must both be numbers or both strings."""
        with pytest.raises(FilterError):
            Range("page", 1, "z")

    def test_grouped_inside_or(self) -> None:
        """Two-sided ranges are parenthesised inside composites."""
        rendered = Or((Range("page", 1, 10), Eq("author", "a"))).render()
        assert rendered == '(page>=1 and page<10) or author="a"'


class TestComposition:
    """Tests for and/or/not composition."""

    def test_and(self) -> None:
        """And joins its conditions."""
        assert And((Eq("a", 1), Eq("b", 2))).render() == "a=1 and b=2"

    def test_nested_groups_are_parenthesised(self) -> None:
        """Nested composites keep their grouping."""
        tree = And((Or((Eq("a", 1), Eq("b", 2))), Eq("c", 3)))
        assert tree.render() == "(a=1 or b=2) and c=3"

    def test_not(self) -> None:
        """Not wraps its operand."""
        assert Not(Eq("a", 1)).render() == "not (a=1)"

    def test_operators(self) -> None:
        """&, | and ~ build composites."""
        tree = (Eq("a", 1) & Eq("b", 2)) | ~Eq("c", 3)
        assert tree.render() == "(a=1 and b=2) or not (c=3)"

    def test_empty_composite_rejected(self) -> None:
        """Composites need at least one operand."""
        with pytest.raises(FilterError):
            And(())

    def test_single_child_composite(self) -> None:
        """A one-element composite renders its child."""
        assert Or((Eq("a", 1),)).render() == "a=1"


class TestFilter:
    """Tests for the Filter wrapper."""

    def test_fluent_chain(self) -> None:
        """Combinators build left to right."""
        f = Filter(Eq("author", "jerry")).and_(In("page", [1, 2])).or_(Eq("x", 0))
        assert f.cond() == '(author="jerry" and page in (1,2)) or x=0'

    def test_combinators_do_not_mutate(self) -> None:
        """Each combinator returns a new filter."""
        base = Filter(Eq("a", 1))
        base.and_(Eq("b", 2))
        assert base.cond() == "a=1"

    def test_not_combinators(self) -> None:
        """and_not and or_not negate their operand."""
        assert Filter(Eq("a", 1)).and_not(Eq("b", 2)).cond() == "a=1 and not (b=2)"
        assert Filter(Eq("a", 1)).or_not(Eq("b", 2)).cond() == "a=1 or not (b=2)"

    def test_raw_string(self) -> None:
        """Raw text is passed through and grouped inside composites."""
        assert Filter('author="jerry"').cond() == 'author="jerry"'
        assert Filter("a=1 or b=2").and_(Eq("c", 3)).cond() == "(a=1 or b=2) and c=3"

    def test_empty_raw_rejected(self) -> None:
        """Empty raw text is rejected."""
        with pytest.raises(FilterError):
            Raw("  ")

    def test_deterministic(self) -> None:
        """The same tree always renders the same string."""
        f = Filter(In("k", ["b", "a"])).and_(Range("n", 1, 2))
        assert f.cond() == f.cond()
        assert f == Filter(In("k", ["b", "a"])).and_(Range("n", 1, 2))

    def test_render_absent_filter(self) -> None:
        """No filter renders to an empty condition."""
        assert render_filter(None) == ""
        assert render_filter(Filter(Eq("a", 1))) == "a=1"


class TestFromDict:
    """Tests for Mongo-style filter mappings."""

    def test_implicit_equality(self) -> None:
        """Plain values mean equality."""
        assert Filter.from_dict({"color": "red"}).cond() == 'color="red"'

    def test_operators(self) -> None:
        """Operator mappings expand per operator."""
        f = Filter.from_dict({"page": {"$gte": 1, "$lt": 10}, "tag": {"$in": ["a"]}})
        assert f.cond() == 'page>=1 and page<10 and tag in ("a")'

    def test_logical_operators(self) -> None:
        """$or, $and and $not nest."""
        f = Filter.from_dict(
            {"$or": [{"a": 1}, {"$and": [{"b": 2}, {"c": {"$ne": 3}}]}], "$not": {"d": 4}}
        )
        assert f.cond() == "(a=1 or (b=2 and c!=3)) and not (d=4)"

    @pytest.mark.parametrize(
        "filters",
        [
            {},
            {"$or": []},
            {"$not": [1]},
            {"page": {"$between": [1, 2]}},
            {"$xor": [{"a": 1}]},
            {"page": {}},
            {"page": {"$in": []}},
        ],
    )
    def test_malformed_mappings(self, filters: dict) -> None:
        """Malformed mappings fail at build time."""
        with pytest.raises(FilterError):
            Filter.from_dict(filters)

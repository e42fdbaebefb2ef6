"""Filter expression builder.

Conditions form an immutable tree that renders to the service's filter
syntax, for example::

    Filter(Eq("author", "jerry")).and_(In("page", [1, 2]))
    # author="jerry" and page in (1,2)

Construction errors raise FilterError immediately; rendering never fails
and never touches the network.
"""

import json
import math
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from vectordb_sdk.exceptions import FilterError

Operand = str | int | float

COMPARISON_OPERATORS = (">", ">=", "<", "<=")


def _check_key(key: str) -> None:
    if not isinstance(key, str) or not key.strip():
        raise FilterError("Filter key must be a non-empty string", details={"key": key})


def _check_operand(key: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise FilterError(
            f"Unsupported operand for {key!r}: {type(value).__name__}",
            details={"key": key, "type": type(value).__name__},
        )
    if isinstance(value, float) and not math.isfinite(value):
        raise FilterError(
            f"Non-finite operand for {key!r}: {value!r}",
            details={"key": key},
        )


def _render_value(value: Operand) -> str:
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return repr(value)


def _operand_tuple(key: str, values: Iterable[Operand], operator: str) -> tuple[Operand, ...]:
    if isinstance(values, (str, bytes)):
        raise FilterError(
            f"{operator} expects a collection of values for {key!r}, not a string",
            details={"key": key},
        )
    items = tuple(values)
    if not items:
        raise FilterError(
            f"{operator} requires at least one value for {key!r}",
            details={"key": key},
        )
    for item in items:
        _check_operand(key, item)
    return items


class Condition(ABC):
    """A node of a filter expression tree."""

    compound = False

    @abstractmethod
    def render(self) -> str:
        """Render the node to filter syntax."""
        ...

    def __and__(self, other: "Condition") -> "And":
        return And((self, other))

    def __or__(self, other: "Condition") -> "Or":
        return Or((self, other))

    def __invert__(self) -> "Not":
        return Not(self)

    def __str__(self) -> str:
        return self.render()


def _wrap(condition: Condition) -> str:
    text = condition.render()
    return f"({text})" if condition.compound else text


@dataclass(frozen=True)
class Raw(Condition):
    """Pre-rendered condition text, passed through verbatim."""

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not self.text.strip():
            raise FilterError("Raw condition must be non-empty text")

    @property
    def compound(self) -> bool:  # type: ignore[override]
        # Unknown structure; keep it grouped inside composites
        return True

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class Eq(Condition):
    """``key = value``."""

    key: str
    value: Operand

    def __post_init__(self) -> None:
        _check_key(self.key)
        _check_operand(self.key, self.value)

    def render(self) -> str:
        return f"{self.key}={_render_value(self.value)}"


@dataclass(frozen=True)
class Ne(Condition):
    """``key != value``."""

    key: str
    value: Operand

    def __post_init__(self) -> None:
        _check_key(self.key)
        _check_operand(self.key, self.value)

    def render(self) -> str:
        return f"{self.key}!={_render_value(self.value)}"


@dataclass(frozen=True)
class Compare(Condition):
    """One-sided comparison, ``key > value`` and friends."""

    key: str
    operator: str
    value: Operand

    def __post_init__(self) -> None:
        _check_key(self.key)
        _check_operand(self.key, self.value)
        if self.operator not in COMPARISON_OPERATORS:
            raise FilterError(
                f"Unsupported comparison operator: {self.operator!r}",
                details={"key": self.key, "operator": self.operator},
            )

    def render(self) -> str:
        return f"{self.key}{self.operator}{_render_value(self.value)}"


@dataclass(frozen=True)
class Range(Condition):
    """Numeric or lexicographic range with optional bounds.

    The lower bound is inclusive and the upper bound exclusive unless
    told otherwise.
    """

    key: str
    lower: Operand | None = None
    upper: Operand | None = None
    include_lower: bool = True
    include_upper: bool = False

    def __post_init__(self) -> None:
        _check_key(self.key)
        if self.lower is None and self.upper is None:
            raise FilterError(
                f"Range on {self.key!r} needs at least one bound",
                details={"key": self.key},
            )
        for bound in (self.lower, self.upper):
            if bound is not None:
                _check_operand(self.key, bound)
        if self.lower is not None and self.upper is not None:
            if isinstance(self.lower, str) != isinstance(self.upper, str):
                raise FilterError(
                    f"Range bounds on {self.key!r} must both be numbers or both be strings",
                    details={"key": self.key},
                )
            if self.lower > self.upper:  # type: ignore[operator]
                raise FilterError(
                    f"Range on {self.key!r} has lower bound above upper bound",
                    details={"key": self.key, "lower": self.lower, "upper": self.upper},
                )

    @property
    def compound(self) -> bool:  # type: ignore[override]
        return self.lower is not None and self.upper is not None

    def _parts(self) -> list[Compare]:
        parts = []
        if self.lower is not None:
            parts.append(Compare(self.key, ">=" if self.include_lower else ">", self.lower))
        if self.upper is not None:
            parts.append(Compare(self.key, "<=" if self.include_upper else "<", self.upper))
        return parts

    def render(self) -> str:
        return " and ".join(part.render() for part in self._parts())


@dataclass(frozen=True, init=False)
class _Membership(Condition):
    key: str
    values: tuple[Operand, ...]

    operator = ""

    def __init__(self, key: str, values: Iterable[Operand]) -> None:
        _check_key(key)
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "values", _operand_tuple(key, values, self.operator))

    def render(self) -> str:
        rendered = ",".join(_render_value(value) for value in self.values)
        return f"{self.key} {self.operator} ({rendered})"


class In(_Membership):
    """Scalar field is one of the values."""

    operator = "in"


class NotIn(_Membership):
    """Scalar field is none of the values."""

    operator = "not in"


class Include(_Membership):
    """Array field contains any of the values."""

    operator = "include"


class Exclude(_Membership):
    """Array field contains none of the values."""

    operator = "exclude"


class IncludeAll(_Membership):
    """Array field contains all of the values."""

    operator = "include all"


@dataclass(frozen=True, init=False)
class _Composite(Condition):
    conditions: tuple[Condition, ...]

    joiner = ""
    compound = True

    def __init__(self, conditions: Iterable[Condition]) -> None:
        items = tuple(conditions)
        if not items:
            raise FilterError(f"'{self.joiner}' needs at least one condition")
        for item in items:
            if not isinstance(item, Condition):
                raise FilterError(
                    f"'{self.joiner}' operands must be conditions, got {type(item).__name__}"
                )
        object.__setattr__(self, "conditions", items)

    def render(self) -> str:
        if len(self.conditions) == 1:
            return self.conditions[0].render()
        return f" {self.joiner} ".join(_wrap(item) for item in self.conditions)


class And(_Composite):
    """All conditions hold."""

    joiner = "and"


class Or(_Composite):
    """Any condition holds."""

    joiner = "or"


@dataclass(frozen=True)
class Not(Condition):
    """Negation of a condition."""

    condition: Condition

    def __post_init__(self) -> None:
        if not isinstance(self.condition, Condition):
            raise FilterError("'not' operand must be a condition")

    def render(self) -> str:
        return f"not ({self.condition.render()})"


def as_condition(value: "Condition | Filter | str") -> Condition:
    """Coerce a condition, filter or raw string into a condition node."""
    if isinstance(value, Condition):
        return value
    if isinstance(value, Filter):
        return value.condition
    if isinstance(value, str):
        return Raw(value)
    raise FilterError(f"Cannot build a filter condition from {type(value).__name__}")


class Filter:
    """Immutable, composable filter attached to a request.

    Each combinator returns a new Filter; the receiver is unchanged.
    """

    __slots__ = ("_condition",)

    def __init__(self, condition: "Condition | Filter | str") -> None:
        self._condition = as_condition(condition)

    @property
    def condition(self) -> Condition:
        """Root node of the expression tree."""
        return self._condition

    def and_(self, condition: "Condition | Filter | str") -> "Filter":
        return Filter(And((self._condition, as_condition(condition))))

    def or_(self, condition: "Condition | Filter | str") -> "Filter":
        return Filter(Or((self._condition, as_condition(condition))))

    def and_not(self, condition: "Condition | Filter | str") -> "Filter":
        return Filter(And((self._condition, Not(as_condition(condition)))))

    def or_not(self, condition: "Condition | Filter | str") -> "Filter":
        return Filter(Or((self._condition, Not(as_condition(condition)))))

    def cond(self) -> str:
        """Render the filter to its condition string."""
        return self._condition.render()

    @classmethod
    def from_dict(cls, filters: Mapping[str, Any]) -> "Filter":
        """Build a filter from a Mongo-style mapping.

        Supported operators:
            - Logical: $and, $or, $not
            - Comparison: $eq, $ne, $gt, $gte, $lt, $lte, $in, $nin
            - Implicit equality: {"color": "red"}

        Raises:
            FilterError: If the mapping is empty or malformed.
        """
        return cls(_condition_from_dict(filters))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Filter):
            return NotImplemented
        return self._condition == other._condition

    def __hash__(self) -> int:
        return hash(self._condition)

    def __repr__(self) -> str:
        return f"Filter({self.cond()!r})"

    def __str__(self) -> str:
        return self.cond()


_DICT_OPERATORS = {
    "$eq": lambda key, value: Eq(key, value),
    "$ne": lambda key, value: Ne(key, value),
    "$gt": lambda key, value: Compare(key, ">", value),
    "$gte": lambda key, value: Compare(key, ">=", value),
    "$lt": lambda key, value: Compare(key, "<", value),
    "$lte": lambda key, value: Compare(key, "<=", value),
    "$in": lambda key, value: In(key, value),
    "$nin": lambda key, value: NotIn(key, value),
}


def _condition_from_dict(filters: Mapping[str, Any]) -> Condition:
    if not isinstance(filters, Mapping) or not filters:
        raise FilterError("Filter mapping must be a non-empty mapping")

    conditions: list[Condition] = []

    for key, value in filters.items():
        if key in ("$and", "$or"):
            if not isinstance(value, list) or not value:
                raise FilterError(f"{key} value must be a non-empty list")
            children = [_condition_from_dict(item) for item in value]
            conditions.append(And(children) if key == "$and" else Or(children))
            continue

        if key == "$not":
            if not isinstance(value, Mapping):
                raise FilterError("$not value must be a mapping")
            conditions.append(Not(_condition_from_dict(value)))
            continue

        if key.startswith("$"):
            raise FilterError(f"Unsupported filter operator: {key}")

        if isinstance(value, Mapping):
            if not value:
                raise FilterError(f"Operator mapping for {key!r} is empty")
            for op, op_value in value.items():
                build = _DICT_OPERATORS.get(op)
                if build is None:
                    raise FilterError(f"Unsupported filter operator: {op}", details={"key": key})
                conditions.append(build(key, op_value))
        else:
            conditions.append(Eq(key, value))

    if len(conditions) == 1:
        return conditions[0]
    return And(conditions)


def render_filter(filter_: Filter | None) -> str:
    """Render an optional filter; an absent filter means no restriction."""
    if filter_ is None:
        return ""
    return filter_.cond()

"""Untyped filters produced by query layers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from exprs.operators import ExprOperator, coerce_operator
from serde_msgspec import StructBaseStrict, dumps_json, loads_json


class Filter(StructBaseStrict, frozen=True):
    """Comparison of a column against a textual literal.

    The literal stays a string until the filter is bound to a schema field.

    Parameters
    ----------
    field_name
        Name of the column the filter applies to.
    operator
        Comparison operator or its canonical token.
    value
        Literal in its textual form.

    Raises
    ------
    UnsupportedOperatorError
        Raised when ``operator`` is not a supported token.
    """

    field_name: str
    operator: ExprOperator
    value: str

    def __post_init__(self) -> None:
        # Tokens passed to the constructor are kept as given; compilation resolves them.
        coerce_operator(self.operator)

    @classmethod
    def from_parts(
        cls,
        field_name: str,
        operator: ExprOperator | str,
        value: str,
    ) -> Filter:
        """Build a filter from a field name, operator token and literal.

        Returns
        -------
        Filter
            Filter with a resolved operator.
        """
        return cls(field_name=field_name, operator=coerce_operator(operator), value=value)

    @classmethod
    def from_tuple(cls, parts: Sequence[str]) -> Filter:
        """Build a filter from a ``(field, operator, value)`` triple.

        Returns
        -------
        Filter
            Filter built from the triple.

        Raises
        ------
        ValueError
            Raised when the sequence does not hold exactly three items.
        """
        if len(parts) != 3:
            msg = f"Filter tuple should have 3 items but got {len(parts)}."
            raise ValueError(msg)
        field_name, operator, value = parts
        return cls.from_parts(field_name, operator, value)

    def __str__(self) -> str:
        return f"{self.field_name} {coerce_operator(self.operator).format()} {self.value}"


class FilterField:
    """Builder producing filters for a single column.

    Examples
    --------
    >>> str(FilterField("count").lte("100"))
    'count <= 100'
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def _filter(self, operator: ExprOperator, value: str) -> Filter:
        return Filter(field_name=self.name, operator=operator, value=value)

    def eq(self, value: str) -> Filter:
        """Return an equality filter."""
        return self._filter(ExprOperator.EQ, value)

    def ne(self, value: str) -> Filter:
        """Return an inequality filter."""
        return self._filter(ExprOperator.NE, value)

    def lt(self, value: str) -> Filter:
        """Return a less-than filter."""
        return self._filter(ExprOperator.LT, value)

    def lte(self, value: str) -> Filter:
        """Return a less-than-or-equal filter."""
        return self._filter(ExprOperator.LTE, value)

    def gt(self, value: str) -> Filter:
        """Return a greater-than filter."""
        return self._filter(ExprOperator.GT, value)

    def gte(self, value: str) -> Filter:
        """Return a greater-than-or-equal filter."""
        return self._filter(ExprOperator.GTE, value)


def filters_from_tuples(items: Iterable[Sequence[str]]) -> list[Filter]:
    """Build filters from predicate triples.

    Returns
    -------
    list[Filter]
        Filters in input order.
    """
    return [Filter.from_tuple(item) for item in items]


def filters_from_json(payload: bytes | str) -> list[Filter]:
    """Decode a JSON array of filter objects.

    Returns
    -------
    list[Filter]
        Decoded filters.
    """
    return loads_json(payload, target_type=list[Filter])


def filters_to_json(filters: Iterable[Filter]) -> bytes:
    """Encode filters as a JSON array.

    Returns
    -------
    bytes
        JSON payload.
    """
    return dumps_json(list(filters))


__all__ = [
    "Filter",
    "FilterField",
    "filters_from_json",
    "filters_from_tuples",
    "filters_to_json",
]

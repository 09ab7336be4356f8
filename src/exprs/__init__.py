"""Filter expressions shared by query and table layers."""

from exprs.filter import (
    Filter,
    FilterField,
    filters_from_json,
    filters_from_tuples,
    filters_to_json,
)
from exprs.operators import ExprOperator, coerce_operator

__all__ = [
    "ExprOperator",
    "Filter",
    "FilterField",
    "coerce_operator",
    "filters_from_json",
    "filters_from_tuples",
    "filters_to_json",
]

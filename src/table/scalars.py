"""Strict casting and typed comparison of partition values.

Partition values travel as ``pyarrow.Scalar`` instances: each scalar carries
its Arrow type next to its payload, so a value is never compared without the
type it was cast to.
"""

from __future__ import annotations

import pyarrow as pa
import pyarrow.compute as pc

from core.errors import ComparisonError, UnsupportedCastError
from exprs.operators import ExprOperator

_CAST_ERRORS: tuple[type[Exception], ...] = (pa.ArrowException, ValueError, TypeError)


def cast_value(value: str, data_type: pa.DataType) -> pa.Scalar:
    """Cast a textual value into ``data_type`` without lossy conversions.

    Parameters
    ----------
    value
        Text to cast, taken from a filter literal or a partition path.
    data_type
        Declared type of the partition column.

    Returns
    -------
    pa.Scalar
        Scalar of type ``data_type``.

    Raises
    ------
    UnsupportedCastError
        Raised when the text cannot be represented in ``data_type``.
    """
    try:
        text = pa.array([value], type=pa.string())
        casted = pc.cast(text, target_type=data_type, safe=True)
    except _CAST_ERRORS as exc:
        raise UnsupportedCastError(data_type, str(exc)) from exc
    return casted[0]


def compare(operator: ExprOperator, left: pa.Scalar, right: pa.Scalar) -> bool:
    """Evaluate ``left <operator> right`` with the Arrow comparison kernel.

    Returns
    -------
    bool
        Outcome of the comparison.

    Raises
    ------
    ComparisonError
        Raised when the operand types differ or the kernel yields null.
    """
    # Kernels promote mismatched numeric types; partition values must match exactly.
    if left.type != right.type:
        msg = f"Cannot compare {left.type} {operator.format()} {right.type}: operand types differ."
        raise ComparisonError(msg)
    try:
        result = pc.call_function(operator.kernel_name, [left, right])
    except _CAST_ERRORS as exc:
        msg = f"Cannot compare {left.type} {operator.format()} {right.type}: {exc}"
        raise ComparisonError(msg) from exc
    outcome = result.as_py()
    if outcome is None:
        msg = f"Comparison {left.type} {operator.format()} {right.type} produced null."
        raise ComparisonError(msg)
    return bool(outcome)


def comparison_expression(
    operator: ExprOperator,
    field_name: str,
    value: pa.Scalar,
) -> pc.Expression:
    """Return a dataset expression comparing a column with a scalar.

    Returns
    -------
    pc.Expression
        Expression usable as a ``pyarrow.dataset`` filter.
    """
    kernel = getattr(pc, operator.kernel_name)
    return kernel(pc.field(field_name), pc.scalar(value))


__all__ = ["cast_value", "compare", "comparison_expression"]

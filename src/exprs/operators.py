"""Comparison operators used in partition filter expressions."""

from __future__ import annotations

from enum import StrEnum

from core.errors import UnsupportedOperatorError

_KERNEL_NAMES: dict[str, str] = {
    "=": "equal",
    "!=": "not_equal",
    "<": "less",
    "<=": "less_equal",
    ">": "greater",
    ">=": "greater_equal",
}


class ExprOperator(StrEnum):
    """Operator of a comparison between a partition column and a literal.

    Member values are the canonical tokens; the enum is the only token table
    used for both parsing and formatting.
    """

    EQ = "="
    NE = "!="
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="

    @classmethod
    def parse(cls, token: str) -> ExprOperator:
        """Return the operator for a token, ignoring case.

        Returns
        -------
        ExprOperator
            Operator matching the token.

        Raises
        ------
        UnsupportedOperatorError
            Raised when the token is not a canonical operator token.
        """
        lowered = token.lower()
        for operator in cls:
            if operator.value.lower() == lowered:
                return operator
        raise UnsupportedOperatorError(token)

    @classmethod
    def token_op_pairs(cls) -> tuple[tuple[str, ExprOperator], ...]:
        """Return every ``(token, operator)`` pair in declaration order.

        Returns
        -------
        tuple[tuple[str, ExprOperator], ...]
            Canonical token table.
        """
        return tuple((operator.value, operator) for operator in cls)

    def format(self) -> str:
        """Return the canonical token for the operator.

        Returns
        -------
        str
            Canonical operator token.
        """
        return self.value

    @property
    def kernel_name(self) -> str:
        """Return the ``pyarrow.compute`` function evaluating this operator."""
        return _KERNEL_NAMES[self.value]


def coerce_operator(value: ExprOperator | str) -> ExprOperator:
    """Return an operator from an enum member or a textual token.

    Returns
    -------
    ExprOperator
        Resolved operator.

    Raises
    ------
    UnsupportedOperatorError
        Raised when ``value`` is not a supported operator token.
    """
    if isinstance(value, ExprOperator):
        return value
    if not isinstance(value, str):
        raise UnsupportedOperatorError(repr(value))
    return ExprOperator.parse(value)


__all__ = ["ExprOperator", "coerce_operator"]

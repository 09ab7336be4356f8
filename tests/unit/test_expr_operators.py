"""Tests for the comparison operator vocabulary."""

from __future__ import annotations

import pytest

from core.errors import ErrorKind, UnsupportedOperatorError
from exprs.operators import ExprOperator, coerce_operator

_CANONICAL_TOKENS = ("=", "!=", "<", "<=", ">", ">=")


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("=", ExprOperator.EQ),
        ("!=", ExprOperator.NE),
        ("<", ExprOperator.LT),
        ("<=", ExprOperator.LTE),
        (">", ExprOperator.GT),
        (">=", ExprOperator.GTE),
    ],
)
def test_parse_canonical_tokens(token: str, expected: ExprOperator) -> None:
    """Parse every canonical token into its operator."""
    assert ExprOperator.parse(token) is expected


@pytest.mark.parametrize("token", _CANONICAL_TOKENS)
def test_format_inverts_parse(token: str) -> None:
    """Format a parsed operator back into the same token."""
    operator = ExprOperator.parse(token)
    assert operator.format() == token
    assert str(operator) == token


def test_parse_is_case_insensitive() -> None:
    """Match tokens regardless of letter case."""
    for token in _CANONICAL_TOKENS:
        assert ExprOperator.parse(token.upper()) is ExprOperator.parse(token)


def test_parse_rejects_unknown_token() -> None:
    """Report the offending token for unsupported operators."""
    with pytest.raises(UnsupportedOperatorError, match=r"Unsupported operator: \?\?") as info:
        ExprOperator.parse("??")
    assert info.value.token == "??"
    assert info.value.kind is ErrorKind.OPERATOR


@pytest.mark.parametrize("token", [" =", "==", "<>", ""])
def test_parse_requires_exact_match(token: str) -> None:
    """Reject tokens that only resemble canonical ones."""
    with pytest.raises(UnsupportedOperatorError):
        ExprOperator.parse(token)


def test_token_op_pairs_cover_every_operator() -> None:
    """Expose one token pair per operator in declaration order."""
    pairs = ExprOperator.token_op_pairs()
    assert tuple(token for token, _ in pairs) == _CANONICAL_TOKENS
    assert {operator for _, operator in pairs} == set(ExprOperator)


def test_kernel_names_are_compute_functions() -> None:
    """Map operators onto pyarrow.compute comparison functions."""
    assert ExprOperator.EQ.kernel_name == "equal"
    assert ExprOperator.NE.kernel_name == "not_equal"
    assert ExprOperator.LTE.kernel_name == "less_equal"
    assert ExprOperator.GT.kernel_name == "greater"


def test_coerce_operator_accepts_members_and_tokens() -> None:
    """Resolve operators from enum members or tokens."""
    assert coerce_operator(ExprOperator.LT) is ExprOperator.LT
    assert coerce_operator(">=") is ExprOperator.GTE

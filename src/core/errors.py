"""Unified error types for partition pruning surfaces."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Categorize pruning errors by the stage that raised them."""

    GENERIC = "generic"
    OPERATOR = "operator"
    PATH = "path"
    CAST = "cast"
    COMPARISON = "comparison"
    CONFIG = "config"


class PruningError(Exception):
    """Base exception for partition pruning failures."""

    def __init__(self, message: str, *, kind: ErrorKind = ErrorKind.GENERIC) -> None:
        super().__init__(message)
        self.kind = kind


class UnsupportedOperatorError(PruningError, ValueError):
    """Raised when an operator token is not one of the canonical tokens."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Unsupported operator: {token}", kind=ErrorKind.OPERATOR)
        self.token = token


class InvalidPartitionPathError(PruningError, ValueError):
    """Raised when a partition path does not match the partition layout."""

    def __init__(self, message: str) -> None:
        super().__init__(message, kind=ErrorKind.PATH)


class FieldNotFoundError(InvalidPartitionPathError):
    """Raised when a filter targets a column outside the partition schema."""

    def __init__(self, field_name: str) -> None:
        super().__init__("Partition path should be in schema.")
        self.field_name = field_name


class UnsupportedCastError(PruningError, TypeError):
    """Raised when a value cannot be strictly cast to a partition column type."""

    def __init__(self, target_type: object, reason: str | None = None) -> None:
        message = f"Unable to cast {target_type}."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message, kind=ErrorKind.CAST)
        self.target_type = target_type


class ComparisonError(PruningError, RuntimeError):
    """Raised when a typed comparison cannot produce a boolean outcome."""

    def __init__(self, message: str) -> None:
        super().__init__(message, kind=ErrorKind.COMPARISON)


class ConfigError(PruningError, ValueError):
    """Raised when a table option carries an invalid value."""

    def __init__(self, message: str) -> None:
        super().__init__(message, kind=ErrorKind.CONFIG)


__all__ = [
    "ComparisonError",
    "ConfigError",
    "ErrorKind",
    "FieldNotFoundError",
    "InvalidPartitionPathError",
    "PruningError",
    "UnsupportedCastError",
    "UnsupportedOperatorError",
]

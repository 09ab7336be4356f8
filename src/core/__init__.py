"""Core error taxonomy shared by expression and table layers."""

from core.errors import (
    ComparisonError,
    ConfigError,
    ErrorKind,
    FieldNotFoundError,
    InvalidPartitionPathError,
    PruningError,
    UnsupportedCastError,
    UnsupportedOperatorError,
)

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

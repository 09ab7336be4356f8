"""Shared utilities for partition pruning."""

from utils.env_utils import env_bool, env_name, env_value, parse_bool_text

__all__ = [
    "env_bool",
    "env_name",
    "env_value",
    "parse_bool_text",
]

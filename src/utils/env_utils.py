"""Environment variable and option text resolution utilities."""

from __future__ import annotations

import logging
import os
from typing import Literal, overload

_LOGGER = logging.getLogger(__name__)

OnInvalid = Literal["default", "none", "false"]

_TRUE_VALUES = frozenset({"1", "true", "yes", "y"})
_FALSE_VALUES = frozenset({"0", "false", "no", "n"})
# -----------------------------------------------------------------------------
# String Helpers
# -----------------------------------------------------------------------------


def env_value(name: str) -> str | None:
    """Return stripped env var value, or None if empty/not set.

    Parameters
    ----------
    name
        Environment variable name.

    Returns
    -------
    str | None
        Stripped value or None.
    """
    raw = os.environ.get(name)
    if raw is None:
        return None
    stripped = raw.strip()
    return stripped if stripped else None


def env_name(option_key: str) -> str:
    """Return the environment variable name that overrides an option key.

    ``hoodie.datasource.write.partitionpath.urlencode`` maps to
    ``HOODIE_DATASOURCE_WRITE_PARTITIONPATH_URLENCODE``.

    Returns
    -------
    str
        Upper-cased, underscore-joined variable name.
    """
    return option_key.replace(".", "_").replace("-", "_").upper()


# -----------------------------------------------------------------------------
# Boolean Parsing
# -----------------------------------------------------------------------------


def parse_bool_text(value: str) -> bool | None:
    """Parse boolean option text, returning None for unrecognized values.

    Returns
    -------
    bool | None
        Parsed boolean, or None when the text is not a boolean literal.
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return None


@overload
def env_bool(name: str) -> bool | None: ...


@overload
def env_bool(name: str, *, default: bool) -> bool: ...


@overload
def env_bool(
    name: str,
    *,
    default: bool,
    on_invalid: OnInvalid,
    log_invalid: bool = False,
) -> bool: ...


@overload
def env_bool(
    name: str,
    *,
    default: bool | None,
    on_invalid: OnInvalid,
    log_invalid: bool = False,
) -> bool | None: ...


def env_bool(
    name: str,
    *,
    default: bool | None = None,
    on_invalid: OnInvalid = "default",
    log_invalid: bool = False,
) -> bool | None:
    """Parse environment variable as boolean.

    Parameters
    ----------
    name
        Environment variable name.
    default
        Default value if not set. If None, returns None when unset.
    on_invalid
        Behavior when an invalid value is provided.
    log_invalid
        Whether to log invalid values.

    Returns
    -------
    bool | None
        Parsed boolean or default/None.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default
    parsed = parse_bool_text(raw)
    if parsed is not None:
        return parsed
    if log_invalid:
        _LOGGER.warning("Invalid boolean for %s: %r", name, raw)
    if on_invalid == "none":
        return None
    if on_invalid == "false":
        return False
    return default


__all__ = [
    "OnInvalid",
    "env_bool",
    "env_name",
    "env_value",
    "parse_bool_text",
]

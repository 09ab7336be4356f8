"""Shared msgspec policy and helpers."""

from __future__ import annotations

import re
from typing import Any, Literal, TypeVar

import msgspec
import pyarrow as pa


class StructBaseStrict(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    repr_omit_defaults=True,
    forbid_unknown_fields=True,
):
    """Base struct for strict contracts."""


T = TypeVar("T")

_DEFAULT_ORDER: Literal["deterministic"] = "deterministic"

_VALIDATION_RE = re.compile(r"^(?P<summary>.*?)(?:\s+-\s+at\s+`(?P<path>[^`]+)`)?$")


def _json_enc_hook(obj: object) -> object:
    if isinstance(obj, pa.Scalar):
        return obj.as_py()
    if isinstance(obj, pa.Field):
        return {"name": obj.name, "type": str(obj.type), "nullable": obj.nullable}
    if isinstance(obj, pa.DataType):
        return str(obj)
    if isinstance(obj, pa.Schema):
        return [_json_enc_hook(field) for field in obj]
    if isinstance(obj, type):
        return f"{obj.__module__}.{obj.__qualname__}"
    raise TypeError


JSON_ENCODER = msgspec.json.Encoder(
    enc_hook=_json_enc_hook,
    order=_DEFAULT_ORDER,
    decimal_format="string",
)


def validation_error_payload(exc: msgspec.ValidationError) -> dict[str, str]:
    """Normalize a msgspec ValidationError for diagnostics.

    Parameters
    ----------
    exc
        ValidationError raised by msgspec decoding/conversion.

    Returns
    -------
    dict[str, str]
        Normalized error payload containing type, summary, and optional path.
    """
    message = str(exc).strip()
    match = _VALIDATION_RE.match(message)
    payload: dict[str, str] = {"type": exc.__class__.__name__}
    if match:
        summary = (match.group("summary") or "").strip()
        if summary:
            payload["summary"] = summary
        path = match.group("path")
        if path:
            payload["path"] = path
        return payload
    payload["summary"] = message
    return payload


def dumps_json(obj: object, *, pretty: bool = False) -> bytes:
    """Serialize an object to JSON bytes.

    Parameters
    ----------
    obj
        Object to serialize.
    pretty
        Whether to format with indentation.

    Returns
    -------
    bytes
        JSON payload.
    """
    raw = JSON_ENCODER.encode(obj)
    if not pretty:
        return raw
    return msgspec.json.format(raw, indent=2)


def loads_json(buf: bytes | str, *, target_type: type[T], strict: bool = True) -> T:
    """Deserialize JSON bytes into the requested type.

    Parameters
    ----------
    buf
        JSON payload.
    target_type
        Target type for decoding.
    strict
        Whether to enforce strict decoding.

    Returns
    -------
    T
        Decoded payload.
    """
    decoder = msgspec.json.Decoder(type=target_type, strict=strict)
    return decoder.decode(buf)


def convert(obj: object, *, target_type: type[T], strict: bool = True) -> T:
    """Convert an object into a target type.

    Parameters
    ----------
    obj
        Object to convert.
    target_type
        Target type for conversion.
    strict
        Whether to enforce strict conversion.

    Returns
    -------
    T
        Converted payload.
    """
    return msgspec.convert(obj, type=target_type, strict=strict)


def to_builtins(obj: object, *, str_keys: bool = True) -> Any:
    """Convert an object into builtin JSON-friendly types.

    Parameters
    ----------
    obj
        Object to convert.
    str_keys
        Whether to coerce mapping keys to strings.

    Returns
    -------
    Any
        Builtin-friendly representation.
    """
    return msgspec.to_builtins(
        obj,
        order=_DEFAULT_ORDER,
        str_keys=str_keys,
        enc_hook=_json_enc_hook,
    )


__all__ = [
    "JSON_ENCODER",
    "StructBaseStrict",
    "convert",
    "dumps_json",
    "loads_json",
    "to_builtins",
    "validation_error_payload",
]

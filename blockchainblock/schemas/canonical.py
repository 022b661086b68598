"""
Schemas & Encoding
File: canonical.py

Purpose: Deterministic JSON encoding of structured payload leaves (dicts
and Pydantic models), so that a leaf committed by one process re-roots to
the same merkle_root in another.

CRITICAL: All outputs from this module MUST be deterministic across runs.
"""

import json
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def ensure_utc(dt: datetime) -> datetime:
    """Return dt as an aware UTC datetime; naive values are taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_datetime_canonical(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 with Z suffix for UTC.

    Returns:
        e.g. "2018-04-28T03:15:22Z", with microseconds only when non-zero.
    """
    utc_dt = ensure_utc(dt)
    fmt = "%Y-%m-%dT%H:%M:%SZ" if utc_dt.microsecond == 0 else "%Y-%m-%dT%H:%M:%S.%fZ"
    return utc_dt.strftime(fmt)


def _child_path(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


def _has_byte_form(value: Any) -> bool:
    # str defines no __bytes__; bytes-like values are handled before this
    return hasattr(type(value), "__bytes__")


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Reduce a payload value to plain JSON types.

    Mapping of Python values:
        - None, bool, int, str: unchanged
        - float: unchanged, NaN and Infinity rejected
        - datetime: ISO-8601 UTC string
        - Enum: its value
        - BaseModel: model_dump(mode="json"), None fields dropped
        - dict: str keys, None values dropped, keys equal as str rejected
        - list/tuple: list, order kept
        - bytes-like and objects defining __bytes__: lowercase hex of their bytes

    Args:
        value: Payload value to canonicalize.
        path: Dotted location inside the outermost value, for errors.

    Raises:
        CanonicalizationException: With details["path"] pointing at the
            offending value.
    """
    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            raise CanonicalizationException(
                message=f"Non-finite float value encountered: {value}",
                details={"path": path, "value": str(value)},
            )
        return value

    if isinstance(value, datetime):
        return format_datetime_canonical(value)

    if isinstance(value, Enum):
        return value.value

    if isinstance(value, BaseModel):
        return canonicalize_value(value.model_dump(mode="json", by_alias=True, exclude_none=True), path)

    if isinstance(value, dict):
        canonical: dict[str, Any] = {}
        seen: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key in seen:
                raise CanonicalizationException(
                    message=f"Keys {seen[key]!r} and {k!r} both serialize as {key!r}",
                    details={"path": _child_path(path, key), "keys": [repr(seen[key]), repr(k)]},
                )
            seen[key] = k
            if v is not None:
                canonical[key] = canonicalize_value(v, _child_path(path, k))
        return canonical

    if isinstance(value, (list, tuple)):
        return [canonicalize_value(item, f"{path}[{i}]") for i, item in enumerate(value)]

    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()

    if _has_byte_form(value):
        return bytes(value).hex()

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any) -> str:
    """
    Serialize a payload value to its canonical JSON string.

    Keys are sorted and no whitespace is emitted; see canonicalize_value()
    for how individual values are mapped.

    Example:
        >>> dumps_canonical({"to": "bob", "amount": 5})
        '{"amount":5,"to":"bob"}'
    """
    canonicalized = canonicalize_value(obj)
    try:
        return json.dumps(
            canonicalized,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
        )
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e


def canonical_bytes(obj: Any) -> bytes:
    """UTF-8 bytes of dumps_canonical(obj); the byte form of structured payloads."""
    return dumps_canonical(obj).encode("utf-8")

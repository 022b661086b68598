"""
Schemas & Encoding
File: byteable.py

Purpose: Canonical little-endian byte representation of payload values.
These bytes are the input to every block hash and Merkle root, so the
encoding of each supported type is a hard contract.

Encoding Rules (Hard Contracts):
1. Objects implementing __bytes__ (the Byteable protocol): bytes(obj)
2. bytes / bytearray / memoryview: raw bytes, unchanged
3. str: UTF-8
4. bool: one byte, 0x00 or 0x01
5. int: signed 32-bit little-endian (wrap in a fixed-width type for others)
6. float: IEEE-754 binary64 little-endian
7. dict / Pydantic model: UTF-8 canonical JSON
8. list / tuple: concatenation of the elements' bytes in iteration order

Framing:
- Framing.CONCAT (default): elements are joined with no delimiter or
  length prefix. "ab" + "c" and "a" + "bc" encode identically.
- Framing.LENGTH_PREFIXED: every element is preceded by its byte length
  as u32 little-endian. Removes the ambiguity but changes every hash.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel

from .canonical import canonical_bytes
from .errors import SerializationException


class Framing(str, Enum):
    """How the byte sequences of consecutive elements are joined."""

    CONCAT = "concat"
    LENGTH_PREFIXED = "length_prefixed"


@runtime_checkable
class Byteable(Protocol):
    """Any value that knows its own canonical byte representation."""

    def __bytes__(self) -> bytes:
        ...


# =============================================================================
# Fixed-width integers
# =============================================================================

@dataclass(frozen=True)
class FixedWidthInt:
    """
    An integer committed with an explicit width and signedness.

    Python ints carry no width, so plain ints are encoded as i32. Wrap a
    value in one of the subclasses below to commit it as another width.
    """

    value: int
    struct_format: ClassVar[str] = "<i"

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise SerializationException(
                message=f"{type(self).__name__} requires an int, got {type(self.value).__name__}",
                details={"type": type(self.value).__name__},
            )
        try:
            struct.pack(self.struct_format, self.value)
        except struct.error as e:
            raise SerializationException(
                message=f"{self.value} does not fit in {type(self).__name__}",
                details={"value": self.value, "format": self.struct_format},
            ) from e

    def __bytes__(self) -> bytes:
        return struct.pack(self.struct_format, self.value)

    def __int__(self) -> int:
        return self.value


class Int8(FixedWidthInt):
    struct_format: ClassVar[str] = "<b"


class UInt8(FixedWidthInt):
    struct_format: ClassVar[str] = "<B"


class Int16(FixedWidthInt):
    struct_format: ClassVar[str] = "<h"


class UInt16(FixedWidthInt):
    struct_format: ClassVar[str] = "<H"


class Int32(FixedWidthInt):
    struct_format: ClassVar[str] = "<i"


class UInt32(FixedWidthInt):
    struct_format: ClassVar[str] = "<I"


class Int64(FixedWidthInt):
    struct_format: ClassVar[str] = "<q"


class UInt64(FixedWidthInt):
    struct_format: ClassVar[str] = "<Q"


# =============================================================================
# Encoding
# =============================================================================

def frame_bytes(data: bytes, framing: Framing = Framing.CONCAT) -> bytes:
    """
    Apply the element framing to one element's bytes.

    Identity under Framing.CONCAT; u32 little-endian length prefix under
    Framing.LENGTH_PREFIXED.
    """
    if framing is Framing.LENGTH_PREFIXED:
        return struct.pack("<I", len(data)) + data
    return data


def to_bytes(value: Any, framing: Framing = Framing.CONCAT) -> bytes:
    """
    Convert a payload value to its canonical byte sequence.

    Args:
        value: A value of one of the supported types (see module docstring)
        framing: How elements of a list/tuple are joined

    Returns:
        The canonical bytes of the value

    Raises:
        SerializationException: If the value has no byte representation

    Example:
        >>> to_bytes([5, "ab"]).hex()
        '050000006162'
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)

    if isinstance(value, Byteable):
        return bytes(value)

    if isinstance(value, str):
        return value.encode("utf-8")

    # bool before int since bool is a subclass of int
    if isinstance(value, bool):
        return b"\x01" if value else b"\x00"

    if isinstance(value, int):
        return bytes(Int32(value))

    if isinstance(value, float):
        return struct.pack("<d", value)

    if isinstance(value, (dict, BaseModel)):
        return canonical_bytes(value)

    if isinstance(value, (list, tuple)):
        return b"".join(frame_bytes(to_bytes(item, framing), framing) for item in value)

    raise SerializationException(
        message=f"Value of type {type(value).__name__} has no byte representation",
        details={"type": type(value).__name__},
    )


def leaf_bytes(value: Any, framing: Framing = Framing.CONCAT) -> bytes:
    """Bytes of a single Merkle leaf, framed for concatenation with its sibling."""
    return frame_bytes(to_bytes(value, framing), framing)


__all__ = [
    "Framing",
    "Byteable",
    "FixedWidthInt",
    "Int8",
    "UInt8",
    "Int16",
    "UInt16",
    "Int32",
    "UInt32",
    "Int64",
    "UInt64",
    "frame_bytes",
    "to_bytes",
    "leaf_bytes",
]

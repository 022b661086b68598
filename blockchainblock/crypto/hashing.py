"""
Crypto - Hashing Utilities
SHA-256 content hashing for block headers and Merkle nodes.

Every digest in a block is a bare SHA-256 over raw bytes: no domain
separation tags and no double hashing. Hashes travel as 32 raw bytes
inside the package and as 0x-prefixed hex in BlockHeader snapshots.
"""
from __future__ import annotations

import hashlib
from typing import Any

from blockchainblock.schemas.errors import BlockValidationException
from blockchainblock.schemas.versioning import HASH_LEN

# Block hash representation: 32 raw bytes of a SHA-256 digest
BlockHash = bytes

# Merkle root of a block with no payload
ZERO_HASH: BlockHash = b"\x00" * HASH_LEN


def sha256(data: bytes) -> BlockHash:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_concat(left: bytes, right: bytes) -> BlockHash:
    """
    Hash the concatenation of two byte sequences: sha256(left + right).

    Used for Merkle parents and for pairs of raw leaves.
    """
    return sha256(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Decode a 0x-prefixed hex string, as produced by to_hex().

    Raises:
        ValueError: If the prefix is missing, the digit count is odd or a
                    digit is not hex
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    digits = hex_string[2:]
    if len(digits) % 2:
        raise ValueError(f"Hex string must have even length after 0x prefix, got length {len(digits)}")

    try:
        return bytes.fromhex(digits)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def hash_from_hex(hex_string: str, name: str = "hash") -> BlockHash:
    """
    Decode a hash published in a BlockHeader back to its 32 raw bytes.

    Raises:
        ValueError: If hex_string is not 0x-prefixed hex
        BlockValidationException: If it does not decode to 32 bytes
    """
    return validate_hash(from_hex(hex_string), name)

def validate_hash(value: Any, name: str = "hash") -> BlockHash:
    """
    Check that a caller-supplied value is a 32-byte hash.

    bytearray and memoryview are accepted and copied to immutable bytes.

    Raises:
        BlockValidationException: If the value is not bytes-like or has the
            wrong length
    """
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise BlockValidationException(
            message=f"{name} must be bytes, got {type(value).__name__}",
            field_path=name,
            details={"expected": "bytes", "actual": type(value).__name__},
        )
    data = bytes(value)
    if len(data) != HASH_LEN:
        raise BlockValidationException(
            message=f"{name} must be {HASH_LEN} bytes, got {len(data)}",
            field_path=name,
            details={"expected": f"{HASH_LEN} bytes", "actual": f"{len(data)} bytes"},
        )
    return data


__all__ = [
    "BlockHash",
    "ZERO_HASH",
    "sha256",
    "hash_concat",
    "to_hex",
    "from_hex",
    "hash_from_hex",
    "validate_hash",
]

"""
Core cryptographic utilities: SHA-256 content hashing and hash helpers.
"""
from .hashing import (
    BlockHash,
    ZERO_HASH,
    sha256,
    hash_concat,
    to_hex,
    from_hex,
    hash_from_hex,
    validate_hash,
)

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

"""
Schemas & Encoding
File: __init__.py

Purpose: Export the public API for the schemas package: protocol constants,
payload byte encoding, canonical JSON, header models and errors.
"""

# Version constants
from .versioning import (
    BLOCK_VERSION,
    HASH_LEN,
    SUPPORTED_BLOCK_VERSIONS,
    U8_MAX,
    U64_MAX,
    UnsupportedBlockVersionError,
    assert_supported_block_version,
    is_compatible_block_version,
)

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonical_bytes,
    canonicalize_value,
    dumps_canonical,
    ensure_utc,
    format_datetime_canonical,
)

# Payload byte encoding
from .byteable import (
    Byteable,
    FixedWidthInt,
    Framing,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    frame_bytes,
    leaf_bytes,
    to_bytes,
)

# Header snapshot and verification report
from .header import BlockHeader, ChainVerificationReport

# Error models and exceptions
from .errors import (
    BlockValidationError,
    BlockValidationException,
    BlockchainError,
    BlockchainException,
    CanonicalizationException,
    ChainLinkException,
    EmptyLeavesException,
    ErrorCodes,
    SerializationException,
)

__all__ = [
    # Versioning
    "BLOCK_VERSION",
    "HASH_LEN",
    "SUPPORTED_BLOCK_VERSIONS",
    "U8_MAX",
    "U64_MAX",
    "UnsupportedBlockVersionError",
    "assert_supported_block_version",
    "is_compatible_block_version",
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonical_bytes",
    "canonicalize_value",
    "dumps_canonical",
    "ensure_utc",
    "format_datetime_canonical",
    # Encoding
    "Byteable",
    "FixedWidthInt",
    "Framing",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "frame_bytes",
    "leaf_bytes",
    "to_bytes",
    # Models
    "BlockHeader",
    "ChainVerificationReport",
    # Errors
    "BlockValidationError",
    "BlockValidationException",
    "BlockchainError",
    "BlockchainException",
    "CanonicalizationException",
    "ChainLinkException",
    "EmptyLeavesException",
    "ErrorCodes",
    "SerializationException",
]

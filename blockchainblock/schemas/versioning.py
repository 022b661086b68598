"""
Schemas & Encoding
File: versioning.py

Purpose: Centralize block protocol constants.
This file must stay small and must not import from other schema files
to avoid circular dependencies.
"""

# Version of the protocol as it appears in block headers (one unsigned byte)
BLOCK_VERSION: int = 1

# Length in bytes of every block hash and Merkle root (SHA-256 digest size)
HASH_LEN: int = 32

# Header versions this build is able to verify
SUPPORTED_BLOCK_VERSIONS: frozenset[int] = frozenset({1})

# Bounds of the unsigned header integer fields
U8_MAX: int = 2**8 - 1
U64_MAX: int = 2**64 - 1


class UnsupportedBlockVersionError(ValueError):
    """Raised when a block carries a protocol version this build cannot verify."""

    def __init__(self, version: int, supported: frozenset[int] | None = None) -> None:
        self.version = version
        self.supported = supported or SUPPORTED_BLOCK_VERSIONS
        super().__init__(
            f"Unsupported block version: {version}. "
            f"Supported versions: {sorted(self.supported)}"
        )


def assert_supported_block_version(version: int) -> None:
    """
    Validate that the given block version is supported.

    Args:
        version: The header version to validate.

    Raises:
        UnsupportedBlockVersionError: If the version is not supported.
    """
    if version not in SUPPORTED_BLOCK_VERSIONS:
        raise UnsupportedBlockVersionError(version)


def is_compatible_block_version(version: int) -> bool:
    """Check if a block version is compatible without raising."""
    return version in SUPPORTED_BLOCK_VERSIONS

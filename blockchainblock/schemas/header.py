"""
Schemas & Encoding
File: header.py

Purpose: Pydantic snapshots of a block header and of a chain verification
run, for consumers that need to log, compare or hand them over to storage.
Hashes are carried as 0x-prefixed lowercase hex strings.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .byteable import Framing
from .versioning import BLOCK_VERSION, U8_MAX, U64_MAX

HASH_HEX_PATTERN = r"^0x[0-9a-f]{64}$"


class BlockHeader(BaseModel):
    """
    Read-only view of the header fields of a finalized block.

    The payload itself is not part of the header; leaf_count records how
    many leaves the Merkle root summarizes.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    current_hash: str = Field(..., pattern=HASH_HEX_PATTERN)
    previous_hash: str | None = Field(default=None, pattern=HASH_HEX_PATTERN)
    timestamp: int = Field(..., ge=0, le=U64_MAX, description="Seconds since the Unix epoch")
    nonce: int = Field(..., ge=0, le=U64_MAX)
    merkle_root: str = Field(..., pattern=HASH_HEX_PATTERN)
    version: int = Field(default=BLOCK_VERSION, ge=0, le=U8_MAX)
    framing: Framing = Field(default=Framing.CONCAT)
    leaf_count: int = Field(..., ge=0)
    chain_root: str | None = Field(default=None, pattern=HASH_HEX_PATTERN)

    @property
    def is_genesis(self) -> bool:
        return self.previous_hash is None


class ChainVerificationReport(BaseModel):
    """
    Result of verifying an ordered run of finalized blocks.

    Each check is recorded with the position of the block it concerns.
    """

    model_config = ConfigDict(extra="forbid")

    verified: bool = Field(default=True, description="Whether every check passed")
    block_count: int = Field(default=0, ge=0)
    checks: list[dict[str, Any]] = Field(default_factory=list)

    total_checks: int = Field(default=0)
    passed_checks: int = Field(default=0)
    failed_checks: int = Field(default=0)

    errors: list[str] = Field(default_factory=list)

    @property
    def failed(self) -> list[dict[str, Any]]:
        """The checks that did not pass."""
        return [c for c in self.checks if not c["passed"]]

    def add_check(
        self,
        check_id: str,
        position: int,
        passed: bool,
        message: str,
    ) -> None:
        """Add a check result to the report."""
        self.checks.append({
            "check_id": check_id,
            "position": position,
            "passed": passed,
            "message": message,
        })

        self.total_checks += 1
        if passed:
            self.passed_checks += 1
        else:
            self.failed_checks += 1
            self.errors.append(message)
            self.verified = False

"""
Chain Verification
Checks over an ordered run of finalized blocks.

Storage stays with the caller: these functions only read the blocks they
are given, oldest first.

Checks per block:
- hash_intact: current_hash recomputes from the block's fields
- version: the header version is supported by this build
- genesis: the first block has no predecessor (when required)
- link: every later block names its predecessor's current_hash
- chain_root: for accumulator blocks in a run starting at genesis, the
  committed block hashes match the run and re-root to chain_root
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from blockchainblock.crypto.hashing import to_hex
from blockchainblock.merkle.merkle_tree import compute_chain_root
from blockchainblock.schemas.byteable import Framing
from blockchainblock.schemas.errors import ChainLinkException
from blockchainblock.schemas.header import ChainVerificationReport
from blockchainblock.schemas.versioning import is_compatible_block_version

from .block import Block

logger = logging.getLogger(__name__)


def _record(
    report: ChainVerificationReport,
    check_id: str,
    position: int,
    passed: bool,
    failure_message: str,
) -> None:
    report.add_check(check_id, position, passed, "ok" if passed else failure_message)


def is_linked(previous: Block[Any], block: Block[Any]) -> bool:
    """True iff block names previous as its predecessor."""
    return block.previous_hash == previous.current_hash


def build_next_block(
    blocks: Sequence[Block[Any]],
    payload: Any,
    timestamp: int,
    nonce: int,
    accumulate: bool = False,
    framing: Optional[Framing] = None,
) -> Block[Any]:
    """
    Build the block that follows blocks[-1].

    The new block links to the last block (or is a genesis block when
    blocks is empty). The input sequence is not modified.

    Args:
        blocks: Finalized blocks, oldest first
        payload: Payload of the new block
        timestamp: Seconds since the Unix epoch
        nonce: Caller-chosen variability field
        accumulate: Also commit the chain of block hashes in chain_root
        framing: Payload framing of the new block

    Returns:
        The new finalized Block
    """
    previous_hash = blocks[-1].current_hash if blocks else None
    return Block(
        previous_hash,
        payload,
        timestamp,
        nonce,
        prior_blocks=list(blocks) if accumulate else None,
        framing=framing,
    )


def verify_chain(
    blocks: Sequence[Block[Any]],
    require_genesis: bool = True,
) -> ChainVerificationReport:
    """
    Verify an ordered run of blocks.

    Args:
        blocks: Finalized blocks, oldest first
        require_genesis: Require blocks[0] to be a genesis block. Set to
                         False to verify a segment taken from the middle of
                         a chain; chain_root checks are then skipped.

    Returns:
        ChainVerificationReport; verified is True for an empty run
    """
    report = ChainVerificationReport(block_count=len(blocks))

    for position, block in enumerate(blocks):
        _record(
            report,
            "hash_intact",
            position,
            block.verify_hash(),
            f"Block {position}: current_hash {to_hex(block.current_hash)} "
            f"does not match its fields",
        )
        _record(
            report,
            "version",
            position,
            is_compatible_block_version(block.version),
            f"Block {position}: unsupported version {block.version}",
        )

        if position == 0:
            if require_genesis:
                _record(
                    report,
                    "genesis",
                    position,
                    block.is_genesis,
                    "Block 0: expected a genesis block without previous_hash",
                )
        else:
            _record(
                report,
                "link",
                position,
                is_linked(blocks[position - 1], block),
                f"Block {position}: previous_hash does not match block {position - 1}",
            )

        if require_genesis and block.chain_hashes is not None:
            expected = tuple(b.current_hash for b in blocks[: position + 1])
            _record(
                report,
                "chain_root",
                position,
                block.chain_hashes == expected
                and block.chain_root == compute_chain_root(expected),
                f"Block {position}: chain_root does not commit to the preceding blocks",
            )

    if report.verified:
        logger.debug("Verified chain of %d blocks (%d checks)", len(blocks), report.total_checks)
    else:
        logger.warning(
            "Chain verification failed: %d of %d checks failed",
            report.failed_checks,
            report.total_checks,
        )
    return report


def assert_chain_valid(
    blocks: Sequence[Block[Any]],
    require_genesis: bool = True,
) -> ChainVerificationReport:
    """
    Verify a run of blocks and raise on the first failed check.

    Raises:
        ChainLinkException: With the failed checks in details
    """
    report = verify_chain(blocks, require_genesis=require_genesis)
    if not report.verified:
        first = report.failed[0]
        raise ChainLinkException(
            message=first["message"],
            position=first["position"],
            details={"check_id": first["check_id"], "failed_checks": report.failed},
        )
    return report

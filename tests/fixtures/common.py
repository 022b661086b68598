"""
Common test fixtures shared by all modules.

Provides factory functions for blockchainblock data structures:
- Block (genesis and linked)
- Runs of linked blocks, with or without the chain accumulator
- Pinned regression vectors

Digests in REGRESSION_VECTORS were computed independently of this package
(sha256sum over hand-assembled bytes) and must never change.
"""

from typing import Any, Optional, Sequence

from blockchainblock.block import Block, build_next_block
from blockchainblock.schemas.byteable import Framing


# =============================================================================
# Regression Vectors
# =============================================================================

REVIEW_TABLE: str = (
    "{\n"
    '   "Adventures of Huckleberry Finn": "My favorite book.",\n'
    '   "Grimms\' Fairy Tales": "Masterpiece.",\n'
    '   "Pride and Prejudice": "Very enjoyable.",\n'
    '   "The Adventures of Sherlock Holmes": "Eye lyked it alot.",\n'
    "   }"
)

REGRESSION_VECTORS: dict[str, dict[str, Any]] = {
    "single_i32": {
        "previous_hash": None,
        "payload": [5],
        "timestamp": 4,
        "nonce": 3,
        "merkle_root": "a23a868b85672de9418b12652e4c1663cb38054c1206157fbf5826bf10f80b2d",
        "current_hash": "17695bb3bec0b2bdc686578fd6875d11328fc003fe90737b2adfc5c7b571e07b",
    },
    "three_strings": {
        "previous_hash": b"\x01" * 32,
        "payload": ["a", "b", "c"],
        "timestamp": 1524885322,
        "nonce": 3,
        "merkle_root": "edf693264b418dd260369f5b604391bbedb124feffd2d961651dfe6cf5f42b9b",
        "current_hash": "36408dad94ac1aac183a7c3775f66783a864f290bc1ee4452b61d3b5bf7f709f",
    },
    "two_review_tables": {
        "previous_hash": b"\x01" * 32,
        "payload": [REVIEW_TABLE, REVIEW_TABLE],
        "timestamp": 1524885322,
        "nonce": 3,
        "merkle_root": "da2b3d14a8e8806b03635a4bbabf74cb87ca670d20911dbcccf576674d3e15d5",
        "current_hash": "dc95ecdbad1d834723f561e43af72d56c5681aece8629004dcd2b111eb71d612",
    },
}


def make_vector_block(name: str) -> Block[Any]:
    """Build the block described by a regression vector."""
    vector = REGRESSION_VECTORS[name]
    return Block(
        vector["previous_hash"],
        vector["payload"],
        vector["timestamp"],
        vector["nonce"],
    )


# =============================================================================
# Block Factories
# =============================================================================

BOOK_REVIEWS: list[str] = [
    '{"Adventures of Huckleberry Finn","Grimms\' Fairy Tales"}',
    '{"Eloquent JavaScript, Second Edition","Learning JavaScript Design Patterns"}',
    '{"The Adventures of Sherlock Holmes","Grimms\' Fairy Tales"}',
    '{"Speaking JavaScript","Programming JavaScript Applications"}',
]


def make_block(
    previous_hash: Optional[bytes] = None,
    payload: Any = None,
    timestamp: int = 1524885322,
    nonce: int = 1,
    prior_blocks: Optional[Sequence[Block[Any]]] = None,
    framing: Optional[Framing] = None,
) -> Block[Any]:
    """
    Create a Block for testing.

    Args:
        previous_hash: Predecessor hash (None for genesis)
        payload: Payload; defaults to BOOK_REVIEWS
        timestamp: Seconds since the epoch
        nonce: Variability field
        prior_blocks: Enables the chain accumulator
        framing: Payload framing

    Returns:
        Finalized Block
    """
    if payload is None:
        payload = list(BOOK_REVIEWS)
    return Block(
        previous_hash,
        payload,
        timestamp,
        nonce,
        prior_blocks=prior_blocks,
        framing=framing,
    )


def make_chain(
    length: int = 4,
    accumulate: bool = False,
    start_timestamp: int = 1524885322,
) -> list[Block[Any]]:
    """
    Create a run of linked blocks starting at a genesis block.

    Block i carries the payload [f"tx{i}-0", f"tx{i}-1", f"tx{i}-2"].
    """
    blocks: list[Block[Any]] = []
    for i in range(length):
        block = build_next_block(
            blocks,
            [f"tx{i}-{j}" for j in range(3)],
            timestamp=start_timestamp + 60 * i,
            nonce=i,
            accumulate=accumulate,
        )
        blocks.append(block)
    return blocks

"""
Merkle Tree Implementation
Deterministic recursive Merkle roots over block payloads and block hashes.

This module provides:
- Payload tree: root over raw payload leaves (intra-block)
- Chain accumulator: root over already-computed block hashes (inter-block)
- Tree depth of the recursive split

Commitment Rules (Hard Contracts):
1. One leaf x: root = sha256(b(x) + b(x)) (the leaf is paired with itself)
2. Two leaves x, y: root = sha256(b(x) + b(y)) over the raw leaf bytes
3. n > 2 leaves: split at n // 2 (left gets n // 2, right the remainder),
   root = sha256(root(left) + root(right))
4. Chain accumulator: identical, except a single block hash is its own root
5. No leaves: EmptyLeavesException. Blocks record ZERO_HASH instead.

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts leaves - it trusts input order
- Swapping the split sides changes every root
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

from blockchainblock.crypto.hashing import BlockHash, hash_concat
from blockchainblock.schemas.byteable import Framing, leaf_bytes
from blockchainblock.schemas.errors import EmptyLeavesException

logger = logging.getLogger(__name__)


def merkle_parent(left: BlockHash, right: BlockHash) -> BlockHash:
    """
    Combine two subtree roots into their parent: sha256(left + right).
    """
    return hash_concat(left, right)


def _payload_root(leaves: Sequence[Any], framing: Framing) -> BlockHash:
    size = len(leaves)
    if size == 1:
        data = leaf_bytes(leaves[0], framing)
        return hash_concat(data, data)
    if size == 2:
        return hash_concat(leaf_bytes(leaves[0], framing), leaf_bytes(leaves[1], framing))

    middle = size // 2
    return merkle_parent(
        _payload_root(leaves[:middle], framing),
        _payload_root(leaves[middle:], framing),
    )


def compute_merkle_root(
    leaves: Sequence[Any],
    framing: Framing = Framing.CONCAT,
) -> BlockHash:
    """
    Compute the Merkle root of a block payload.

    Leaves are raw payload values; each is converted with to_bytes() and
    only hashed as part of its pair.

    Args:
        leaves: Ordered, non-empty sequence of payload values.
                Order matters and is preserved.
        framing: Leaf framing (see blockchainblock.schemas.byteable)

    Returns:
        32-byte Merkle root

    Raises:
        EmptyLeavesException: If leaves is empty
        SerializationException: If a leaf has no byte representation

    Example:
        >>> a, b, c = "a", "b", "c"
        >>> compute_merkle_root([a, b, c]) == merkle_parent(
        ...     compute_merkle_root([a]), compute_merkle_root([b, c]))
        True
    """
    if len(leaves) == 0:
        raise EmptyLeavesException()

    root = _payload_root(leaves, framing)
    logger.debug("Merkle root over %d payload leaves: %s", len(leaves), root.hex())
    return root


def _chain_root(hashes: Sequence[BlockHash]) -> BlockHash:
    size = len(hashes)
    if size == 1:
        return hashes[0]
    if size == 2:
        return hash_concat(hashes[0], hashes[1])

    middle = size // 2
    return merkle_parent(_chain_root(hashes[:middle]), _chain_root(hashes[middle:]))


def compute_chain_root(hashes: Sequence[BlockHash]) -> BlockHash:
    """
    Compute the accumulator root over an ordered run of block hashes.

    Unlike compute_merkle_root(), a single hash is returned unchanged:
    the chain root of a one-block chain is that block's own hash.

    Args:
        hashes: Ordered, non-empty sequence of 32-byte block hashes

    Returns:
        32-byte chain root

    Raises:
        EmptyLeavesException: If hashes is empty
    """
    if len(hashes) == 0:
        raise EmptyLeavesException("Cannot compute a chain root over no block hashes")

    root = _chain_root(hashes)
    logger.debug("Chain root over %d block hashes: %s", len(hashes), root.hex())
    return root


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of the recursive split tree over num_leaves leaves.

    Depth counts levels from the leaves to the root (inclusive). A single
    leaf has depth 1, two leaves depth 2, three leaves depth 3 (the right
    half [b, c] sits under the root).

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        # The right half is never smaller than the left
        n -= n // 2
        depth += 1

    return depth


__all__ = [
    "merkle_parent",
    "compute_merkle_root",
    "compute_chain_root",
    "compute_tree_depth",
]

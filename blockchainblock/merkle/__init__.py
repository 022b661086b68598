"""
Merkle Roots
Recursive split-tree roots over block payloads and over block hashes.

This package provides:
- compute_merkle_root: payload tree of a single block
- compute_chain_root: accumulator over the hashes of a run of blocks
- merkle_parent: combine two subtree roots
- compute_tree_depth: depth of the recursive split tree

Usage:
    from blockchainblock.merkle import compute_merkle_root

    root = compute_merkle_root(["a", "b", "c"])
    # == sha256(sha256(b"aa") + sha256(b"bc"))
"""
from .merkle_tree import (
    merkle_parent,
    compute_merkle_root,
    compute_chain_root,
    compute_tree_depth,
)

__all__ = [
    "merkle_parent",
    "compute_merkle_root",
    "compute_chain_root",
    "compute_tree_depth",
]

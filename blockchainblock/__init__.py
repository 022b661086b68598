"""
blockchainblock

A customizable base for a blockchain implementation: the per-block
cryptographic envelope (content hash, link to the predecessor and a Merkle
root over the payload) plus tamper checks.

Usage:
    from blockchainblock import Block

    genesis = Block(None, ["tx1", "tx2"], timestamp=1524885322, nonce=1)
    child = Block(genesis.current_hash, ["tx3"], timestamp=1524885400, nonce=2)
    assert genesis.check_value_in_block("tx2", 1)
"""

__version__ = "0.1.0"

from .block import Block, assert_chain_valid, build_next_block, is_linked, verify_chain
from .config import RuntimeConfig, setup_logging
from .crypto import ZERO_HASH, BlockHash, sha256
from .merkle import compute_chain_root, compute_merkle_root
from .schemas import (
    BLOCK_VERSION,
    HASH_LEN,
    BlockchainException,
    BlockHeader,
    Byteable,
    ChainVerificationReport,
    Framing,
    Int32,
    UInt64,
    to_bytes,
)

__all__ = [
    "__version__",
    "Block",
    "assert_chain_valid",
    "build_next_block",
    "is_linked",
    "verify_chain",
    "RuntimeConfig",
    "setup_logging",
    "ZERO_HASH",
    "BlockHash",
    "sha256",
    "compute_chain_root",
    "compute_merkle_root",
    "BLOCK_VERSION",
    "HASH_LEN",
    "BlockchainException",
    "BlockHeader",
    "Byteable",
    "ChainVerificationReport",
    "Framing",
    "Int32",
    "UInt64",
    "to_bytes",
]

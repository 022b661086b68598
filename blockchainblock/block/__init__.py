"""
Block entity and chain verification.
"""
from .block import Block
from .chain import assert_chain_valid, build_next_block, is_linked, verify_chain

__all__ = [
    "Block",
    "assert_chain_valid",
    "build_next_block",
    "is_linked",
    "verify_chain",
]

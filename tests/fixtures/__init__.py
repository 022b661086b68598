"""
Test fixtures package for blockchainblock tests.

Usage:
    from fixtures import make_block, make_chain

    def test_something():
        block = make_block(payload=["a", "b"])
        chain = make_chain(length=3, accumulate=True)
"""

from .common import (
    BOOK_REVIEWS,
    REGRESSION_VECTORS,
    REVIEW_TABLE,
    make_block,
    make_chain,
    make_vector_block,
)

__all__ = [
    "BOOK_REVIEWS",
    "REGRESSION_VECTORS",
    "REVIEW_TABLE",
    "make_block",
    "make_chain",
    "make_vector_block",
]

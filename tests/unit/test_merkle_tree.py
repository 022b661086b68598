"""
Merkle Tree Unit Tests
Tests for blockchainblock/merkle/merkle_tree.py

Tests:
1. Singleton rule - [x] roots to sha256(b(x) + b(x))
2. Pair rule - [x, y] roots to sha256(b(x) + b(y)) over raw bytes
3. Split tie-break - left half gets n // 2 leaves
4. Sensitivity - any single changed leaf changes the root
5. Chain accumulator - a single hash is its own root
6. Empty leaves - EmptyLeavesException
"""
import pytest

from blockchainblock.crypto.hashing import sha256
from blockchainblock.merkle.merkle_tree import (
    compute_chain_root,
    compute_merkle_root,
    compute_tree_depth,
    merkle_parent,
)
from blockchainblock.schemas.byteable import Framing, Int32, UInt64, to_bytes
from blockchainblock.schemas.errors import EmptyLeavesException, ErrorCodes


class TestEmptyTree:
    """Tests for empty input."""

    def test_empty_leaves_raises(self):
        with pytest.raises(EmptyLeavesException) as exc_info:
            compute_merkle_root([])

        assert exc_info.value.code == ErrorCodes.EMPTY_LEAVES

    def test_empty_chain_raises(self):
        with pytest.raises(EmptyLeavesException, match="no block hashes"):
            compute_chain_root([])


class TestSingleLeaf:
    """The self-paired base case."""

    def test_single_leaf_is_self_paired(self):
        assert compute_merkle_root(["x"]) == sha256(b"xx")

    def test_single_i32_leaf(self):
        assert compute_merkle_root([5]).hex() == (
            "a23a868b85672de9418b12652e4c1663cb38054c1206157fbf5826bf10f80b2d"
        )

    def test_single_leaf_root_is_not_leaf_hash(self):
        assert compute_merkle_root(["x"]) != sha256(b"x")

    def test_single_sequence_leaf_concatenates(self):
        """A leaf that is itself a list is encoded as the concatenation of its items."""
        assert compute_merkle_root([["a", "b"]]) == sha256(b"abab")


class TestPair:
    """Two leaves are hashed together once, unhashed."""

    def test_pair_rule(self):
        assert compute_merkle_root(["x", "y"]) == sha256(b"xy")

    def test_pair_order_matters(self):
        assert compute_merkle_root(["x", "y"]) != compute_merkle_root(["y", "x"])

    def test_pair_of_fixed_width_ints(self):
        expected = sha256(to_bytes(UInt64(1)) + to_bytes(Int32(2)))

        assert compute_merkle_root([UInt64(1), Int32(2)]) == expected


class TestSplit:
    """Recursive split for more than two leaves."""

    def test_three_leaves_left_gets_one(self):
        a, b, c = "a", "b", "c"
        expected = merkle_parent(sha256(b"aa"), sha256(b"bc"))

        assert compute_merkle_root([a, b, c]) == expected

    def test_three_leaves_pinned(self):
        assert compute_merkle_root(["a", "b", "c"]).hex() == (
            "edf693264b418dd260369f5b604391bbedb124feffd2d961651dfe6cf5f42b9b"
        )

    def test_three_leaves_not_right_heavy_split(self):
        """Putting two leaves on the left would give a different root."""
        swapped = merkle_parent(sha256(b"ab"), sha256(b"cc"))

        assert compute_merkle_root(["a", "b", "c"]) != swapped

    def test_four_leaves_balanced(self):
        expected = merkle_parent(sha256(b"ab"), sha256(b"cd"))

        assert compute_merkle_root(["a", "b", "c", "d"]) == expected

    def test_five_leaves(self):
        # [a, b] | [c, d, e] -> [a, b] | ([c] | [d, e])
        right = merkle_parent(sha256(b"cc"), sha256(b"de"))
        expected = merkle_parent(sha256(b"ab"), right)

        assert compute_merkle_root(["a", "b", "c", "d", "e"]) == expected

    def test_seven_leaves(self):
        # [a, b, c] | [d, e, f, g]
        left = merkle_parent(sha256(b"aa"), sha256(b"bc"))
        right = merkle_parent(sha256(b"de"), sha256(b"fg"))

        assert compute_merkle_root(list("abcdefg")) == merkle_parent(left, right)


class TestDeterminismAndSensitivity:
    def test_same_leaves_same_root(self):
        leaves = [f"leaf{i}" for i in range(9)]

        roots = [compute_merkle_root(leaves) for _ in range(5)]

        assert all(r == roots[0] for r in roots)

    @pytest.mark.parametrize("size", [2, 3, 4, 5, 8, 13])
    def test_changing_any_leaf_changes_root(self, size):
        leaves = [f"leaf{i}" for i in range(size)]
        root = compute_merkle_root(leaves)

        for i in range(size):
            tampered = list(leaves)
            tampered[i] = f"tampered{i}"
            assert compute_merkle_root(tampered) != root, f"Leaf {i} change not detected"

    def test_tuple_and_list_agree(self):
        assert compute_merkle_root(("a", "b", "c")) == compute_merkle_root(["a", "b", "c"])


class TestFraming:
    def test_concat_pair_ambiguity(self):
        """Without framing, ["ab", "c"] and ["a", "bc"] share a root."""
        assert compute_merkle_root(["ab", "c"]) == compute_merkle_root(["a", "bc"])

    def test_length_prefixed_pair(self):
        framing = Framing.LENGTH_PREFIXED
        expected = sha256(b"\x02\x00\x00\x00ab" + b"\x01\x00\x00\x00c")

        assert compute_merkle_root(["ab", "c"], framing) == expected
        assert compute_merkle_root(["ab", "c"], framing) != compute_merkle_root(["a", "bc"], framing)

    def test_length_prefixed_single_leaf(self):
        framed = b"\x01\x00\x00\x00x"

        assert compute_merkle_root(["x"], Framing.LENGTH_PREFIXED) == sha256(framed + framed)


class TestChainRoot:
    """Accumulator over already-computed block hashes."""

    def test_single_hash_is_its_own_root(self):
        h = sha256(b"block")

        assert compute_chain_root([h]) == h

    def test_two_hashes(self):
        h0, h1 = sha256(b"0"), sha256(b"1")

        assert compute_chain_root([h0, h1]) == sha256(h0 + h1)

    def test_three_hashes_split(self):
        h0, h1, h2 = (sha256(bytes([i])) for i in range(3))

        assert compute_chain_root([h0, h1, h2]) == merkle_parent(h0, sha256(h1 + h2))

    def test_differs_from_payload_tree_for_singleton(self):
        h = sha256(b"block")

        assert compute_chain_root([h]) != compute_merkle_root([h])

    def test_agrees_with_payload_tree_for_pairs(self):
        """With raw 32-byte leaves only the singleton base case differs."""
        hashes = [sha256(bytes([i])) for i in range(4)]

        assert compute_chain_root(hashes) == compute_merkle_root(hashes)


class TestTreeDepth:
    @pytest.mark.parametrize(
        "leaves, depth",
        [(0, 0), (1, 1), (2, 2), (3, 3), (4, 3), (5, 4), (8, 4), (9, 5)],
    )
    def test_depth(self, leaves, depth):
        assert compute_tree_depth(leaves) == depth

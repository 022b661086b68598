"""
Block Entity
One immutable unit of a hash-linked chain.

A Block commits to its payload through a Merkle root and to its
predecessor through previous_hash; current_hash covers both.

Content Hash Layout (Hard Contract, hashed exactly once):
    previous_hash  32 bytes, omitted for the genesis block
    payload        to_bytes(payload)
    timestamp      u64 little-endian
    nonce          u64 little-endian
    merkle_root    32 bytes
    version        u8

Two Merkle strategies are kept apart:
- merkle_root: payload tree, calculate_merkle_root(). Never depends on
  header fields. ZERO_HASH when the payload is empty.
- chain_root: accumulator over the hashes of all prior blocks plus this
  one, calculate_chain_root(). Only present when the block is built with
  prior_blocks.
"""
from __future__ import annotations

import copy
import logging
import struct
from dataclasses import InitVar, dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, Sequence, TypeVar, Union

from blockchainblock.config.runtime import RuntimeConfig
from blockchainblock.crypto.hashing import BlockHash, ZERO_HASH, sha256, to_hex, validate_hash
from blockchainblock.merkle.merkle_tree import compute_chain_root, compute_merkle_root
from blockchainblock.schemas.byteable import FixedWidthInt, Framing, to_bytes
from blockchainblock.schemas.errors import BlockValidationException, ChainLinkException
from blockchainblock.schemas.header import BlockHeader
from blockchainblock.schemas.versioning import BLOCK_VERSION, U64_MAX

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _validate_u64(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise BlockValidationException(
            message=f"{name} must be an int, got {type(value).__name__}",
            field_path=name,
            details={"expected": "int", "actual": type(value).__name__},
        )
    if not 0 <= value <= U64_MAX:
        raise BlockValidationException(
            message=f"{name} must fit in an unsigned 64-bit integer, got {value}",
            field_path=name,
            details={"expected": f"0..{U64_MAX}", "actual": str(value)},
        )
    return value


def _in_range(position: Any, size: int) -> bool:
    # bool is an int subclass but never a position
    if isinstance(position, bool) or not isinstance(position, int):
        return False
    return 0 <= position < size


def _freeze(value: Any) -> Any:
    """
    Detach a payload value from the caller.

    Sequences become tuples (recursively), bytes-like buffers become bytes
    and any other mutable value is deep-copied, so later changes made by
    the caller cannot reach the committed payload.
    """
    if value is None or isinstance(value, (str, bytes, bool, int, float, Enum, FixedWidthInt)):
        return value
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return copy.deepcopy(value)


@dataclass(frozen=True, eq=False, repr=False)
class Block(Generic[T]):
    """
    A finalized block.

    Args:
        previous_hash: current_hash of the predecessor, None for genesis
        payload: A single value, or a list/tuple whose items are the leaves.
                 Stored as a detached copy: sequences as tuples, buffers
                 as bytes. None means no payload.
        timestamp: Seconds since the Unix epoch (u64), not checked against
                   the wall clock
        nonce: Caller-chosen variability field (u64)
        prior_blocks: Finalized blocks preceding this one, oldest first.
                      Enables chain_root; the last one must be the
                      predecessor named by previous_hash.
        framing: Payload framing; defaults to config.framing, then CONCAT
        config: Optional RuntimeConfig supplying the framing

    Raises:
        BlockValidationException: If a header field is malformed
        ChainLinkException: If previous_hash does not match prior_blocks
        SerializationException: If the payload has no byte representation

    Example:
        >>> block = Block(None, [5], timestamp=4, nonce=3)
        >>> block.current_hash.hex()[:8]
        '17695bb3'
        >>> block.check_value_in_block(5, 0)
        True
    """

    previous_hash: Optional[BlockHash]
    payload: Union[T, tuple[T, ...], None]
    timestamp: int
    nonce: int
    prior_blocks: InitVar[Optional[Sequence["Block[Any]"]]] = None
    framing: Optional[Framing] = None
    config: InitVar[Optional[RuntimeConfig]] = None

    # Derived once in __post_init__
    version: int = field(init=False, default=BLOCK_VERSION)
    merkle_root: BlockHash = field(init=False, default=ZERO_HASH)
    current_hash: BlockHash = field(init=False, default=ZERO_HASH)
    chain_hashes: Optional[tuple[BlockHash, ...]] = field(init=False, default=None)
    chain_root: Optional[BlockHash] = field(init=False, default=None)

    def __post_init__(
        self,
        prior_blocks: Optional[Sequence["Block[Any]"]],
        config: Optional[RuntimeConfig],
    ) -> None:
        # Frozen dataclass: derived fields are written through object.__setattr__
        set_field = object.__setattr__

        if self.previous_hash is not None:
            set_field(self, "previous_hash", validate_hash(self.previous_hash, "previous_hash"))
        _validate_u64(self.timestamp, "timestamp")
        _validate_u64(self.nonce, "nonce")

        framing = self.framing
        if framing is None:
            framing = config.framing if config is not None else Framing.CONCAT
        try:
            set_field(self, "framing", Framing(framing))
        except ValueError as e:
            raise BlockValidationException(
                message=f"Unknown framing: {framing!r}",
                field_path="framing",
                details={"expected": str([f.value for f in Framing]), "actual": str(framing)},
            ) from e

        set_field(self, "payload", _freeze(self.payload))

        leaves = self.leaves
        if leaves:
            set_field(self, "merkle_root", self.calculate_merkle_root(leaves))

        set_field(self, "current_hash", self.calculate_hash())

        if prior_blocks is not None:
            prior_hashes = tuple(b.current_hash for b in prior_blocks)
            if prior_hashes and prior_hashes[-1] != self.previous_hash:
                raise ChainLinkException(
                    message="previous_hash does not match the last prior block",
                    position=len(prior_hashes),
                    details={
                        "expected": to_hex(prior_hashes[-1]),
                        "actual": to_hex(self.previous_hash) if self.previous_hash else None,
                    },
                )
            chain_hashes = prior_hashes + (self.current_hash,)
            set_field(self, "chain_hashes", chain_hashes)
            set_field(self, "chain_root", self.calculate_chain_root(chain_hashes))

        logger.debug(
            "Built block %s (previous=%s, leaves=%d)",
            self.current_hash.hex(),
            self.previous_hash.hex() if self.previous_hash else None,
            len(leaves),
        )

    # -------------------------------------------------------------------------
    # Derived views
    # -------------------------------------------------------------------------

    @property
    def leaves(self) -> tuple[Any, ...]:
        """The payload items the Merkle root summarizes."""
        if self.payload is None:
            return ()
        if isinstance(self.payload, tuple):
            return self.payload
        return (self.payload,)

    @property
    def is_genesis(self) -> bool:
        return self.previous_hash is None

    @property
    def header(self) -> BlockHeader:
        """Pydantic snapshot of the header fields."""
        return BlockHeader(
            current_hash=to_hex(self.current_hash),
            previous_hash=to_hex(self.previous_hash) if self.previous_hash else None,
            timestamp=self.timestamp,
            nonce=self.nonce,
            merkle_root=to_hex(self.merkle_root),
            version=self.version,
            framing=self.framing,
            leaf_count=len(self.leaves),
            chain_root=to_hex(self.chain_root) if self.chain_root else None,
        )

    def payload_bytes(self) -> bytes:
        """Canonical bytes of the whole payload, as committed by current_hash."""
        if self.payload is None:
            return b""
        return to_bytes(self.payload, self.framing)

    # -------------------------------------------------------------------------
    # Hashing
    # -------------------------------------------------------------------------

    def calculate_hash(self) -> BlockHash:
        """
        Recompute the content hash from the current header fields.

        The field order is part of the contract shared with every peer
        computing the same chain.
        """
        data = bytearray()
        if self.previous_hash is not None:
            data.extend(self.previous_hash)
        data.extend(self.payload_bytes())
        data.extend(struct.pack("<Q", self.timestamp))
        data.extend(struct.pack("<Q", self.nonce))
        data.extend(self.merkle_root)
        data.extend(struct.pack("<B", self.version))
        return sha256(bytes(data))

    def calculate_merkle_root(self, leaves: Sequence[Any]) -> BlockHash:
        """Payload-tree root of leaves, using this block's framing."""
        return compute_merkle_root(leaves, self.framing)

    def calculate_chain_root(self, hashes: Sequence[BlockHash]) -> BlockHash:
        """Accumulator root over an ordered run of block hashes."""
        return compute_chain_root(hashes)

    def verify_hash(self) -> bool:
        """True iff current_hash still matches the fields it commits to."""
        return self.calculate_hash() == self.current_hash

    # -------------------------------------------------------------------------
    # Tamper / membership checks
    # -------------------------------------------------------------------------

    def check_value_in_block(self, value: Any, position: int) -> bool:
        """
        Check that value is the leaf committed at position.

        The payload with the leaf at position replaced by value is
        re-rooted and compared with merkle_root. This needs the whole leaf
        set; it is not a compact inclusion proof.

        Returns:
            False for a position outside the payload or one that is not an
            int, otherwise whether the recomputed root equals merkle_root
        """
        leaves = self.leaves
        if not _in_range(position, len(leaves)):
            return False

        candidate = list(leaves)
        candidate[position] = value
        return self.calculate_merkle_root(candidate) == self.merkle_root

    def check_block_in_chain(self, block_hash: BlockHash, position: int) -> bool:
        """
        Check that block_hash is the block committed at position of the chain.

        Position 0 is the oldest prior block; the last position is this
        block. Always False for a block built without prior_blocks.
        """
        if self.chain_hashes is None or self.chain_root is None:
            return False
        if not _in_range(position, len(self.chain_hashes)):
            return False

        candidate = list(self.chain_hashes)
        candidate[position] = block_hash
        return self.calculate_chain_root(candidate) == self.chain_root

    # -------------------------------------------------------------------------
    # Dunder
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Block):
            return NotImplemented
        return self.current_hash == other.current_hash

    def __hash__(self) -> int:
        return hash(self.current_hash)

    def __repr__(self) -> str:
        previous = to_hex(self.previous_hash) if self.previous_hash else None
        chain_root = to_hex(self.chain_root) if self.chain_root else None
        return (
            f"Block(current_hash={to_hex(self.current_hash)}, "
            f"previous_hash={previous}, "
            f"payload={self.payload!r}, "
            f"timestamp={self.timestamp}, "
            f"nonce={self.nonce}, "
            f"merkle_root={to_hex(self.merkle_root)}, "
            f"version={self.version}, "
            f"chain_root={chain_root})"
        )

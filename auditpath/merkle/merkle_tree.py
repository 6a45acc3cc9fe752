"""
Module 02 - Merkle Tree Builder
Deterministic construction of a power-of-two padded Merkle tree.

This module provides:
- MerkleTree: immutable flat-array tree with O(1) leaf lookup
- build_merkle_tree: build the full tree from ordered leaf digests
- merkle_parent: the parent rule for one pair of child slots
- next_power_of_two / compute_tree_depth: size arithmetic

Tree Layout (flat, bottom-up):

             root = h(h01 + h23)
            /                   \\
      h01 = h(l0 + l1)      h23 = h(l2 + l3)
       /        \\            /        \\
      l0        l1          l2        l3

    nodes = [l0, l1, l2, l3, h01, h23, root]

- Leaf level occupies nodes[0:P], where P = next_power_of_two(N)
- Leaf slots [N, P) are absent (None)
- Each level above holds half as many slots as the one below it
- The root is the last slot; len(nodes) == 2*P - 1

Parent Rule:
1. Left child absent -> parent absent
2. Right child absent -> parent = h(left + left)
3. Otherwise          -> parent = h(left + right)

where h is double SHA-256 (see auditpath.crypto.hashing.hash_concat).
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, Optional

from auditpath.config.runtime import get_default_config
from auditpath.crypto.hashing import HASH_SIZE, digest_to_hex, hash_concat
from auditpath.schemas.errors import EmptyInputException, InvalidEncodingException


logger = logging.getLogger(__name__)

# A tree slot: a 32-byte digest, or None for an absent node
Node = Optional[bytes]


def next_power_of_two(n: int) -> int:
    """
    Smallest power of two greater than or equal to n.

    Args:
        n: Positive integer

    Returns:
        n itself if it is already a power of two, otherwise the next one up

    Raises:
        ValueError: If n < 1
    """
    if n < 1:
        raise ValueError(f"n must be positive, got {n}")
    return 1 << (n - 1).bit_length()


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of levels (leaf level through root, inclusive) for a tree
    built over num_leaves leaves. Also the length of every proof.

    A single leaf has depth 1, two leaves depth 2, three or four leaves
    depth 3, and so on. An empty tree has depth 0.
    """
    if num_leaves == 0:
        return 0
    return next_power_of_two(num_leaves).bit_length()


def merkle_parent(left: Node, right: Node) -> Node:
    """
    Compute the parent slot of two child slots.

    Args:
        left: Left child digest or None
        right: Right child digest or None

    Returns:
        None if left is absent, h(left + left) if only right is absent,
        h(left + right) otherwise
    """
    if left is None:
        return None
    if right is None:
        return hash_concat(left, left)
    return hash_concat(left, right)


@dataclass(frozen=True)
class MerkleTree:
    """
    An immutable Merkle tree stored as one flat tuple of slots.

    Attributes:
        nodes: All slots bottom-up; len(nodes) == 2 * width - 1
        leaf_count: Number of leaves supplied to the builder (N)
    """
    nodes: tuple[Node, ...]
    leaf_count: int
    _leaf_index: dict[bytes, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        size = len(self.nodes)
        width = (size + 1) // 2
        if size == 0 or width & (width - 1) != 0 or size != 2 * width - 1:
            raise ValueError(f"Tree size must be 2*P - 1 for a power of two P, got {size}")
        if not 1 <= self.leaf_count <= width:
            raise ValueError(
                f"leaf_count must be in [1, {width}], got {self.leaf_count}"
            )

        # First occurrence wins for duplicate leaves
        index: dict[bytes, int] = {}
        for i in range(width):
            leaf = self.nodes[i]
            if leaf is not None and leaf not in index:
                index[leaf] = i
        object.__setattr__(self, "_leaf_index", index)

    @property
    def width(self) -> int:
        """Leaf-level width P (a power of two)."""
        return (len(self.nodes) + 1) // 2

    @property
    def depth(self) -> int:
        """Number of levels including the root: log2(P) + 1."""
        return self.width.bit_length()

    @property
    def root(self) -> Node:
        """The root slot (last index)."""
        return self.nodes[-1]

    @property
    def root_index(self) -> int:
        return len(self.nodes) - 1

    @property
    def leaves(self) -> tuple[Node, ...]:
        """The full leaf level, padding included."""
        return self.nodes[: self.width]

    def level_offsets(self) -> list[int]:
        """Starting flat index of every level, leaf level first."""
        offsets = []
        offset = 0
        level_width = self.width
        while level_width >= 1:
            offsets.append(offset)
            offset += level_width
            level_width //= 2
        return offsets

    def levels(self) -> list[tuple[Node, ...]]:
        """Slots grouped per level, leaf level first."""
        result = []
        level_width = self.width
        for offset in self.level_offsets():
            result.append(self.nodes[offset: offset + level_width])
            level_width //= 2
        return result

    def index_of(self, digest: bytes) -> int | None:
        """
        Flat index of the first leaf equal to digest.

        Only the leaf level is searched. Returns None if not present.
        """
        if not isinstance(digest, (bytes, bytearray)):
            return None
        return self._leaf_index.get(bytes(digest))

    def __contains__(self, digest: object) -> bool:
        return self.index_of(digest) is not None

    def __len__(self) -> int:
        return len(self.nodes)

    def to_hex_list(self) -> list[str | None]:
        """Slots rendered as hex strings (None stays None), for display."""
        return [None if node is None else digest_to_hex(node) for node in self.nodes]


def _check_leaf(position: int, leaf: object) -> Node:
    if leaf is None:
        return None
    if not isinstance(leaf, (bytes, bytearray)):
        raise InvalidEncodingException(
            f"Leaf {position} must be bytes or None, got {type(leaf).__name__}"
        )
    if len(leaf) != HASH_SIZE:
        raise InvalidEncodingException(
            f"Leaf {position} must be {HASH_SIZE} bytes, got {len(leaf)}",
            length=len(leaf),
        )
    return bytes(leaf)


def _reduce_level(level: list[Node], pool: ThreadPoolExecutor | None) -> list[Node]:
    lefts = level[0::2]
    rights = level[1::2]
    if pool is None:
        return [merkle_parent(left, right) for left, right in zip(lefts, rights)]
    return list(pool.map(merkle_parent, lefts, rights))


def build_merkle_tree(
    leaves: Iterable[Node],
    *,
    max_workers: int | None = None,
    parallel_threshold: int | None = None,
) -> MerkleTree:
    """
    Build the full Merkle tree over an ordered sequence of leaf digests.

    Algorithm:
    1. P = next_power_of_two(N)
    2. Copy the N leaves into slots [0, N); slots [N, P) are absent
    3. Reduce pairs of the current level left to right with
       merkle_parent, appending each parent after the level below
    4. Stop when the single root slot has been appended

    Example: [a, b, c] -> [a, b, c, None, h(a+b), h(c+c), root]

    Args:
        leaves: Ordered leaf digests (32 bytes each); None marks an
                absent entry. Order is preserved, never sorted.
        max_workers: Threads used to hash a level (default from config)
        parallel_threshold: Minimum level width hashed in parallel
                            (default from config)

    Returns:
        MerkleTree with 2*P - 1 slots

    Raises:
        EmptyInputException: If leaves is empty
        InvalidEncodingException: If a present leaf is not 32 bytes
    """
    leaf_list = [_check_leaf(i, leaf) for i, leaf in enumerate(leaves)]
    if not leaf_list:
        raise EmptyInputException()

    hashing = get_default_config().hashing
    if max_workers is None:
        max_workers = hashing.max_workers
    if parallel_threshold is None:
        parallel_threshold = hashing.parallel_threshold

    width = next_power_of_two(len(leaf_list))
    level: list[Node] = leaf_list + [None] * (width - len(leaf_list))
    nodes: list[Node] = list(level)

    use_pool = max_workers > 1 and width >= parallel_threshold
    logger.debug(
        "Building Merkle tree: leaves=%d width=%d slots=%d parallel=%s",
        len(leaf_list), width, 2 * width - 1, use_pool,
    )

    pool = ThreadPoolExecutor(max_workers=max_workers) if use_pool else None
    try:
        while len(level) > 1:
            level_pool = pool if pool is not None and len(level) >= parallel_threshold else None
            level = _reduce_level(level, level_pool)
            nodes.extend(level)
    finally:
        if pool is not None:
            pool.shutdown()

    return MerkleTree(nodes=tuple(nodes), leaf_count=len(leaf_list))


def build_merkle_root(leaves: Iterable[Node]) -> Node:
    """
    Compute only the root of the tree built over leaves.

    Returns None when the first leaf is absent (absent propagates).
    """
    return build_merkle_tree(leaves).root


__all__ = [
    "Node",
    "MerkleTree",
    "merkle_parent",
    "next_power_of_two",
    "compute_tree_depth",
    "build_merkle_tree",
    "build_merkle_root",
]

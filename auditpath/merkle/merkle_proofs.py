"""
Module 03 - Audit Path Generation and Verification

This module provides:
- AuditProof: positions and slot values needed to recompute a root
- generate_proof: walk a built tree from a leaf up to the root
- verify_proof: recompute the root from a leaf and a proof
- MerkleProver / MerkleVerifier: class-based convenience wrappers

Proof Layout:
    positions = [p0, p1, ..., root_index]
    siblings  = [s0, s1, ..., root]

Entry k (k < last) is the flat index and value of the sibling of the
target's ancestor on level k; the value may be None (absent). The last
entry is the root itself, compared against rather than hashed.

Verification Rules:
1. Sibling absent     -> acc = h(acc + acc)
2. Position even      -> sibling is on the left:  acc = h(sibling + acc)
3. Position odd       -> sibling is on the right: acc = h(acc + sibling)
4. Final entry        -> valid iff acc == root (exact bytes)

Level offsets are even for every level below the root, so the parity of
a flat index equals the parity of the slot within its level.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from auditpath.crypto.hashing import HASH_SIZE, digest_to_hex, hash_concat
from auditpath.merkle.merkle_tree import MerkleTree, Node, build_merkle_root, build_merkle_tree
from auditpath.schemas.errors import LeafNotFoundException, MalformedProofException


logger = logging.getLogger(__name__)

# Receives (step, position, accumulator) after each hashing step
StepObserver = Callable[[int, int, bytes], None]


@dataclass(frozen=True)
class AuditProof:
    """
    An inclusion proof for a single leaf.

    The proof copies every value it needs; it holds no reference to the
    tree it was generated from.

    Attributes:
        positions: Flat tree indices, leaf level first, root index last
        siblings: Slot values at those indices; the last one is the root
    """
    positions: tuple[int, ...]
    siblings: tuple[Node, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "positions", tuple(self.positions))
        object.__setattr__(self, "siblings", tuple(self.siblings))

    def __len__(self) -> int:
        return len(self.positions)

    @property
    def root(self) -> Node:
        """The terminal root entry, or None for an empty proof."""
        return self.siblings[-1] if self.siblings else None

    @property
    def root_index(self) -> int | None:
        return self.positions[-1] if self.positions else None

    def steps(self) -> list[tuple[int, Node]]:
        """(position, sibling) pairs to hash, root entry excluded."""
        return list(zip(self.positions[:-1], self.siblings[:-1]))


def generate_proof(target: bytes, tree: MerkleTree) -> AuditProof:
    """
    Generate the audit path for a leaf of a built tree.

    Algorithm:
    1. Locate target in the leaf level (first match wins)
    2. Leaf level: sibling is index+1 if index is even, index-1 if odd
    3. Each level above: index //= 2, same parity rule, plus the level's
       offset in the flat array (sum of all lower level widths)
    4. Append (root_index, root)

    A single-leaf tree has no sibling levels; its proof is just the root
    entry.

    A leaf whose path meets an absent left node still gets its proof; it
    does not reach the root, so verification reports False (or
    MalformedProofException when the root itself is absent).

    Args:
        target: Leaf digest to prove
        tree: Tree built by build_merkle_tree

    Returns:
        AuditProof of length tree.depth

    Raises:
        LeafNotFoundException: If target is not a leaf of the tree
    """
    index = tree.index_of(target)
    if index is None:
        target_hex = digest_to_hex(bytes(target)) if isinstance(target, (bytes, bytearray)) else None
        raise LeafNotFoundException(
            "Target digest not found among tree leaves",
            target=target_hex,
        )

    if tree.depth == 1:
        return AuditProof(positions=(tree.root_index,), siblings=(tree.root,))

    positions: list[int] = []
    siblings: list[Node] = []

    offset = 0
    level_width = tree.width
    node_index = index
    for level in range(tree.depth - 1):
        sibling_index = node_index + 1 if node_index % 2 == 0 else node_index - 1
        position = offset + sibling_index
        value = tree.nodes[position]

        positions.append(position)
        siblings.append(value)
        logger.debug("Proof level %d: node=%d sibling_position=%d", level, node_index, position)

        offset += level_width
        level_width //= 2
        node_index //= 2

    positions.append(tree.root_index)
    siblings.append(tree.root)

    return AuditProof(positions=tuple(positions), siblings=tuple(siblings))


def _check_digest(value: object, what: str) -> None:
    if not isinstance(value, (bytes, bytearray)) or len(value) != HASH_SIZE:
        raise MalformedProofException(
            f"{what} must be a {HASH_SIZE}-byte digest",
            reason="bad_digest",
        )


def check_proof_shape(proof: AuditProof) -> None:
    """
    Validate the structure of a proof without hashing anything.

    Raises:
        MalformedProofException: If the proof is empty, its sequences
            differ in length, it does not end in a present root entry at
            the root index implied by its length, or a sibling entry lies
            outside its level or is not a 32-byte digest
    """
    count = len(proof.positions)
    if count == 0:
        raise MalformedProofException("Proof has no entries", reason="empty")
    if len(proof.siblings) != count:
        raise MalformedProofException(
            f"Proof has {count} positions but {len(proof.siblings)} siblings",
            reason="length_mismatch",
        )

    width = 1 << (count - 1)
    root_index = 2 * width - 2
    if proof.positions[-1] != root_index:
        raise MalformedProofException(
            f"Final position must be root index {root_index}, got {proof.positions[-1]}",
            reason="root_position",
        )
    if proof.siblings[-1] is None:
        raise MalformedProofException("Proof root entry is absent", reason="absent_root")
    _check_digest(proof.siblings[-1], "Proof root")

    offset = 0
    level_width = width
    for level, (position, sibling) in enumerate(proof.steps()):
        if not offset <= position < offset + level_width:
            raise MalformedProofException(
                f"Position {position} is outside level {level} "
                f"[{offset}, {offset + level_width})",
                reason="position_out_of_level",
            )
        if sibling is not None:
            _check_digest(sibling, f"Sibling at level {level}")
        offset += level_width
        level_width //= 2


def verify_proof(
    leaf: bytes,
    proof: AuditProof,
    observer: Optional[StepObserver] = None,
) -> bool:
    """
    Verify that leaf is a member of the tree whose root ends the proof.

    Args:
        leaf: Claimed leaf digest
        proof: AuditProof as produced by generate_proof
        observer: Optional callback receiving (step, position, accumulator)
                  after each hashing step

    Returns:
        True if the recomputed root equals the proof's root entry,
        False otherwise (a mismatch is not an error)

    Raises:
        MalformedProofException: If the proof's shape is invalid
    """
    check_proof_shape(proof)

    if not isinstance(leaf, (bytes, bytearray)) or len(leaf) != HASH_SIZE:
        logger.debug("Claimed leaf is not a %d-byte digest; rejecting", HASH_SIZE)
        return False

    acc = bytes(leaf)
    for step, (position, sibling) in enumerate(proof.steps()):
        if sibling is None:
            acc = hash_concat(acc, acc)
        elif position % 2 == 0:
            acc = hash_concat(sibling, acc)
        else:
            acc = hash_concat(acc, sibling)

        logger.debug("Verify step %d: position=%d acc=%s", step, position, digest_to_hex(acc))
        if observer is not None:
            observer(step, position, acc)

    return acc == proof.siblings[-1]


class MerkleProver:
    """
    Convenience class for generating proofs straight from leaves.

    Example:
        >>> from auditpath.crypto.hashing import double_sha256
        >>> leaves = [double_sha256(b"a"), double_sha256(b"b")]
        >>> proof = MerkleProver.prove(leaves, leaves[1])
        >>> len(proof)
        2
    """

    @staticmethod
    def prove(leaves: Iterable[Node], target: bytes) -> AuditProof:
        """
        Build a tree over leaves and prove target.

        Raises:
            EmptyInputException: If leaves is empty
            LeafNotFoundException: If target is not among leaves
        """
        return generate_proof(target, build_merkle_tree(leaves))

    @staticmethod
    def prove_index(leaves: Sequence[Node], index: int) -> AuditProof:
        """
        Prove the leaf at the given index.

        With duplicate leaves, the proof is for the first equal leaf.

        Raises:
            IndexError: If index is out of range
        """
        if index < 0 or index >= len(leaves):
            raise IndexError(f"Leaf index {index} out of range for {len(leaves)} leaves")
        return generate_proof(leaves[index], build_merkle_tree(leaves))

    @staticmethod
    def compute_root(leaves: Iterable[Node]) -> Node:
        """Root of the tree built over leaves."""
        return build_merkle_root(leaves)


class MerkleVerifier:
    """
    Convenience class for verifying proofs.

    Example:
        >>> from auditpath.crypto.hashing import double_sha256
        >>> leaves = [double_sha256(b"a"), double_sha256(b"b")]
        >>> proof = MerkleProver.prove(leaves, leaves[0])
        >>> MerkleVerifier.verify(leaves[0], proof)
        True
    """

    @staticmethod
    def verify(leaf: bytes, proof: AuditProof) -> bool:
        """Verify leaf against the root carried by the proof."""
        return verify_proof(leaf, proof)

    @staticmethod
    def verify_against_root(leaf: bytes, proof: AuditProof, expected_root: bytes) -> bool:
        """
        Verify leaf and additionally require the proof to end in a
        trusted root obtained out of band.
        """
        if not verify_proof(leaf, proof):
            return False
        return proof.root == expected_root


__all__ = [
    "AuditProof",
    "StepObserver",
    "generate_proof",
    "check_proof_shape",
    "verify_proof",
    "MerkleProver",
    "MerkleVerifier",
]

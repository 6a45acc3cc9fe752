"""
Module 00 - Schemas
File: wire.py

Purpose: JSON wire form of trees and proofs. Digests travel as 64-char
lowercase hex strings; absent slots travel as null.

Models only constrain shape. Decoding a proof back into core types goes
through digest_from_hex, so malformed hex surfaces as
InvalidEncodingException rather than a generic validation error.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from auditpath.crypto.hashing import digest_from_hex, digest_to_hex
from auditpath.merkle.merkle_proofs import AuditProof
from auditpath.merkle.merkle_tree import MerkleTree, Node


def _node_to_hex(node: Node) -> str | None:
    return None if node is None else digest_to_hex(node)


def _node_from_hex(text: str | None) -> Node:
    return None if text is None else digest_from_hex(text)


class ProofDocument(BaseModel):
    """
    Serialized audit path.

    positions and siblings are parallel lists; the last entry is the
    root index and root digest.
    """

    model_config = ConfigDict(extra="forbid")

    positions: list[int] = Field(..., description="Flat tree indices, root index last")
    siblings: list[str | None] = Field(..., description="Digest hex per position, root last")
    leaf: str | None = Field(default=None, description="Optional leaf digest the proof is for")

    @classmethod
    def from_proof(cls, proof: AuditProof, leaf: bytes | None = None) -> "ProofDocument":
        return cls(
            positions=list(proof.positions),
            siblings=[_node_to_hex(s) for s in proof.siblings],
            leaf=None if leaf is None else digest_to_hex(leaf),
        )

    def to_proof(self) -> AuditProof:
        """
        Decode into an AuditProof.

        Raises:
            InvalidEncodingException: If any digest hex is malformed
        """
        return AuditProof(
            positions=tuple(self.positions),
            siblings=tuple(_node_from_hex(s) for s in self.siblings),
        )

    def leaf_digest(self) -> bytes | None:
        return _node_from_hex(self.leaf)


class TreeDocument(BaseModel):
    """Serialized tree: sizes, root and every slot bottom-up."""

    model_config = ConfigDict(extra="forbid")

    leaf_count: int = Field(..., ge=1)
    width: int = Field(..., ge=1, description="Leaf-level width P")
    depth: int = Field(..., ge=1, description="Levels including the root")
    root: str | None = Field(default=None, description="Root digest hex, null if absent")
    nodes: list[str | None] = Field(default_factory=list)

    @classmethod
    def from_tree(cls, tree: MerkleTree, include_nodes: bool = True) -> "TreeDocument":
        return cls(
            leaf_count=tree.leaf_count,
            width=tree.width,
            depth=tree.depth,
            root=_node_to_hex(tree.root),
            nodes=tree.to_hex_list() if include_nodes else [],
        )


__all__ = [
    "ProofDocument",
    "TreeDocument",
]

"""
Modules 02/03 - Merkle Tree and Audit Paths
Power-of-two padded Merkle tree construction, proof generation and
proof verification.

This package provides:
- MerkleTree: immutable flat-array tree
- build_merkle_tree: build the tree from ordered leaf digests
- generate_proof: audit path for one leaf
- verify_proof: recompute and compare the root from a leaf and a proof

Commitment Rules:
1. Branch hashing: parent = sha256(sha256(left + right))
2. Padding: leaf level padded with absent slots up to a power of two
3. Right-duplication: parent = h(left + left) when the right child is absent
4. Absent propagation: parent is absent when the left child is absent
5. Single leaf: root = leaf, proof is the root entry alone

Usage:
    from auditpath.merkle import build_merkle_tree, generate_proof, verify_proof

    tree = build_merkle_tree(leaves)
    proof = generate_proof(leaves[2], tree)
    assert verify_proof(leaves[2], proof)
"""
from .merkle_tree import (
    MerkleTree,
    Node,
    merkle_parent,
    next_power_of_two,
    compute_tree_depth,
    build_merkle_tree,
    build_merkle_root,
)

from .merkle_proofs import (
    AuditProof,
    StepObserver,
    generate_proof,
    check_proof_shape,
    verify_proof,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleTree",
    "AuditProof",
    "Node",
    "StepObserver",
    # Core functions
    "merkle_parent",
    "next_power_of_two",
    "compute_tree_depth",
    "build_merkle_tree",
    "build_merkle_root",
    "generate_proof",
    "check_proof_shape",
    "verify_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]

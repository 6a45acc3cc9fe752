"""
Common test fixtures shared by all modules.

Provides reference digests and factory functions for leaves, trees and
proofs.
"""

from auditpath.crypto.hashing import digest_from_hex, double_sha256
from auditpath.merkle.merkle_proofs import AuditProof, generate_proof
from auditpath.merkle.merkle_tree import MerkleTree, build_merkle_tree


# Reference leaf digests (hex) used throughout the tests
VECTOR_LEAVES_HEX = [
    "5fd362bb7fe89969942cafdeaa0b71e726b759e52a256a1d33ef613410d71aaa",
    "e5f44aafcc241093201d5e67955d562089bf9374bf0313b4947fd3023e85a0ff",
    "00a8269382dc8d931583e7722f07dc56ee42e2c913d4fd571336966c47b2e115",
    "fe703d4b44f8116142115cd36e54b591ff20f471c6349fe4ab47915a13fceea8",
    "711453e26062ced8919b10264660d983664c5e5f0a6c5dbb4cd65ae58cb381f1",
]

# Root of the tree over the first three reference leaves
VECTOR_ROOT_3_HEX = "d142242c39397e6909f6ceb7258cbdae41b029710e35debd7004d25314ddfd42"


def make_leaf(label: str) -> bytes:
    """A deterministic 32-byte leaf digest for a label."""
    return double_sha256(label.encode("utf-8"))


def make_leaves(count: int, prefix: str = "leaf") -> list[bytes]:
    """count distinct deterministic leaf digests."""
    return [make_leaf(f"{prefix}{i}") for i in range(count)]


def vector_leaves(count: int = 5) -> list[bytes]:
    """The first count reference leaves as bytes."""
    return [digest_from_hex(h) for h in VECTOR_LEAVES_HEX[:count]]


def make_tree(count: int) -> MerkleTree:
    """A tree over count generated leaves."""
    return build_merkle_tree(make_leaves(count))


def make_proof(count: int, index: int) -> tuple[bytes, AuditProof, MerkleTree]:
    """(leaf, proof, tree) for leaf index in a tree of count generated leaves."""
    leaves = make_leaves(count)
    tree = build_merkle_tree(leaves)
    return leaves[index], generate_proof(leaves[index], tree), tree


def flip_byte(data: bytes, position: int = 0) -> bytes:
    """Copy of data with one byte inverted."""
    mutated = bytearray(data)
    mutated[position] ^= 0xFF
    return bytes(mutated)

"""
Test fixtures package.

This package provides reference vectors and factory functions for
creating test leaves, trees and proofs.

Usage:
    from fixtures import make_leaves, make_proof

    def test_something():
        leaf, proof, tree = make_proof(5, index=4)
"""

from .common import (
    VECTOR_LEAVES_HEX,
    VECTOR_ROOT_3_HEX,
    make_leaf,
    make_leaves,
    vector_leaves,
    make_tree,
    make_proof,
    flip_byte,
)

__all__ = [
    "VECTOR_LEAVES_HEX",
    "VECTOR_ROOT_3_HEX",
    "make_leaf",
    "make_leaves",
    "vector_leaves",
    "make_tree",
    "make_proof",
    "flip_byte",
]

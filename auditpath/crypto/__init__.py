"""
Core cryptographic utilities.

Module 01 provides the hash primitive and digest hex codecs.
"""
from .hashing import (
    HASH_SIZE,
    sha256,
    double_sha256,
    hash_concat,
    digest_to_hex,
    digest_from_hex,
)

__all__ = [
    "HASH_SIZE",
    "sha256",
    "double_sha256",
    "hash_concat",
    "digest_to_hex",
    "digest_from_hex",
]

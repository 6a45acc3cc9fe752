"""
Module 01 - Hash Primitive
Digest and branch-hash utilities for the Merkle audit path.

This module provides:
- SHA-256 hashing for raw bytes
- Double SHA-256 (digest-of-digest), the digest used for every tree node
- Branch hashing of two concatenated child digests
- Strict hex encoding/decoding of 32-byte digests

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- No auto-stripping of whitespace or prefixes when parsing digests
- Malformed hex is a hard failure, never truncated or zero-padded
"""
from __future__ import annotations

import hashlib
import re

from auditpath.schemas.errors import InvalidEncodingException


# Size in bytes of every digest in the tree
HASH_SIZE: int = 32

_DIGEST_HEX_RE = re.compile(r"[0-9a-fA-F]{%d}" % (HASH_SIZE * 2))


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def double_sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 applied twice: sha256(sha256(data)).

    This is the digest used for leaves built from raw data and for
    every branch node of the tree.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte digest
    """
    return sha256(sha256(data))


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two child digests.

    This is the branch hash used for Merkle parent nodes:
    parent = sha256(sha256(left + right))

    Args:
        left: Left child digest (32 bytes)
        right: Right child digest (32 bytes)

    Returns:
        32-byte digest of the concatenation
    """
    return double_sha256(left + right)


def digest_to_hex(digest: bytes) -> str:
    """Render a digest as 64 lowercase hex characters."""
    return digest.hex()


def digest_from_hex(text: str) -> bytes:
    """
    Parse the textual form of a digest.

    Accepts exactly 64 hex characters. Upper case is accepted and
    normalized; prefixes and whitespace are not.

    Args:
        text: Hex string of a 32-byte digest

    Returns:
        Decoded 32-byte digest

    Raises:
        InvalidEncodingException: If the string has the wrong length or
            contains non-hex characters

    Example:
        >>> len(digest_from_hex("00" * 32))
        32
    """
    if not isinstance(text, str):
        raise InvalidEncodingException(
            f"Digest must be a hex string, got {type(text).__name__}"
        )
    if len(text) != HASH_SIZE * 2:
        raise InvalidEncodingException(
            f"Digest hex must be exactly {HASH_SIZE * 2} characters, got {len(text)}",
            length=len(text),
        )
    if not _DIGEST_HEX_RE.fullmatch(text):
        raise InvalidEncodingException(
            "Digest hex contains non-hex characters",
            length=len(text),
        )
    return bytes.fromhex(text)


__all__ = [
    "HASH_SIZE",
    "sha256",
    "double_sha256",
    "hash_concat",
    "digest_to_hex",
    "digest_from_hex",
]

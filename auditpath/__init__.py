"""
auditpath - Merkle tree audit paths.

Build a binary Merkle tree over ordered leaf digests, produce the audit
path for any leaf, and verify membership against a root using only the
path.
"""

__version__ = "0.1.0"

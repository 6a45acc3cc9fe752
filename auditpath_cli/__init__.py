"""
auditpath CLI

Command-line interface for building Merkle trees and audit paths.

Usage:
    python -m auditpath_cli build <hex>... [--json]
    python -m auditpath_cli prove <target-hex> <hex>... --out proof.json
    python -m auditpath_cli verify proof.json [--root HEX]
    python -m auditpath_cli config --init
"""

__version__ = "0.1.0"

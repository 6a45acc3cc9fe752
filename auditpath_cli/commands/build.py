"""
CLI Build Command

Build a Merkle tree over hex leaf digests and print its root.

Usage:
    auditpath build <hex>... [--file PATH] [--json] [--nodes]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path

from auditpath.crypto.hashing import digest_from_hex
from auditpath.merkle.merkle_tree import MerkleTree, Node, build_merkle_tree
from auditpath.schemas.wire import TreeDocument


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1

# Token standing for an absent leaf on the command line or in a leaf file
ABSENT_TOKEN = "null"


def parse_leaf(token: str) -> Node:
    """Parse one leaf token: 64 hex chars, or 'null' for an absent slot."""
    if token == ABSENT_TOKEN:
        return None
    return digest_from_hex(token)


def read_leaf_file(path: Path) -> list[str]:
    """Read leaf tokens from a file, one per line; blank lines and # comments skipped."""
    tokens = []
    for line in path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            tokens.append(line)
    return tokens


def load_leaves(args: Namespace) -> list[Node]:
    """Collect leaves from positional tokens followed by --file contents."""
    tokens = list(getattr(args, "leaves", None) or [])
    if getattr(args, "file", None):
        tokens.extend(read_leaf_file(Path(args.file)))
    return [parse_leaf(t) for t in tokens]


def print_tree_human(tree: MerkleTree, show_nodes: bool = False) -> None:
    """Print a tree summary in human-readable format."""
    doc = TreeDocument.from_tree(tree)
    print(f"leaves: {doc.leaf_count}")
    print(f"width: {doc.width}")
    print(f"depth: {doc.depth}")
    print(f"root: {doc.root if doc.root is not None else 'nil'}")
    if show_nodes:
        print("\nnodes:")
        for i, node in enumerate(doc.nodes):
            print(f"  {i}: {node if node is not None else 'nil'}")


def build_cmd(args: Namespace) -> int:
    """Handle the build command."""
    leaves = load_leaves(args)
    logger.info(f"Building tree over {len(leaves)} leaves")
    tree = build_merkle_tree(leaves)

    if args.json:
        doc = TreeDocument.from_tree(tree, include_nodes=args.nodes)
        print(json.dumps(doc.model_dump(mode="json"), indent=2))
    else:
        print_tree_human(tree, show_nodes=args.nodes)

    return EXIT_SUCCESS

"""
CLI Prove Command

Generate the audit path for one leaf and emit it as JSON.

Usage:
    auditpath prove <target-hex> <hex>... [--file PATH] [--out PATH]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path

from auditpath.crypto.hashing import digest_from_hex
from auditpath.merkle.merkle_proofs import generate_proof
from auditpath.merkle.merkle_tree import build_merkle_tree
from auditpath.schemas.wire import ProofDocument
from auditpath_cli.commands.build import load_leaves


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0


def prove_cmd(args: Namespace) -> int:
    """Handle the prove command."""
    target = digest_from_hex(args.target)
    leaves = load_leaves(args)

    tree = build_merkle_tree(leaves)
    proof = generate_proof(target, tree)
    logger.info(f"Generated proof with {len(proof)} entries")

    doc = ProofDocument.from_proof(proof, leaf=target)
    payload = json.dumps(doc.model_dump(mode="json"), indent=2)

    if args.out:
        out_path = Path(args.out)
        out_path.write_text(payload + "\n")
        print(f"Proof written to: {out_path}")
    else:
        print(payload)

    return EXIT_SUCCESS

"""
CLI Verify Command

Verify a leaf against a saved proof offline.

Usage:
    auditpath verify <proof.json> [--leaf HEX] [--root HEX] [--trace] [--json]

The leaf defaults to the one recorded in the proof file. With --root the
proof must also terminate in that trusted root.
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from auditpath.crypto.hashing import digest_from_hex, digest_to_hex
from auditpath.merkle.merkle_proofs import verify_proof
from auditpath.schemas.wire import ProofDocument


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    leaf: str = ""
    root: str = ""
    proof_ok: bool = False
    root_ok: bool | None = None
    trace: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.root_ok is None:
            del d["root_ok"]
        if not d["trace"]:
            del d["trace"]
        return d

    @property
    def all_ok(self) -> bool:
        """Check if all verifications passed."""
        if not self.proof_ok:
            return False
        if self.root_ok is not None and not self.root_ok:
            return False
        return True


def load_proof_document(path: Path) -> ProofDocument:
    """Load a ProofDocument from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Proof file not found: {path}")
    return ProofDocument.model_validate_json(path.read_text())


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"proof: {summary.proof_path}")
    print(f"leaf: {summary.leaf}")
    print(f"root: {summary.root}")
    if summary.trace:
        print("\ntrace:")
        for entry in summary.trace:
            print(f"  {entry['step']}: [{entry['position']}] {entry['accumulator']}")
        print()
    print(f"proof_ok: {str(summary.proof_ok).lower()}")
    if summary.root_ok is not None:
        print(f"root_ok: {str(summary.root_ok).lower()}")
    print(f"\nresult: {'VALID' if summary.all_ok else 'INVALID'}")


def verify_cmd(args: Namespace) -> int:
    """Handle the verify command."""
    proof_path = Path(args.proof_path)
    doc = load_proof_document(proof_path)

    if args.leaf:
        leaf = digest_from_hex(args.leaf)
    else:
        leaf = doc.leaf_digest()
        if leaf is None:
            raise ValueError("No leaf given and the proof file does not record one")

    proof = doc.to_proof()
    summary = VerifySummary(proof_path=str(proof_path), leaf=digest_to_hex(leaf))

    def record_step(step: int, position: int, acc: bytes) -> None:
        summary.trace.append({
            "step": step,
            "position": position,
            "accumulator": digest_to_hex(acc),
        })

    logger.info(f"Verifying proof with {len(proof)} entries")
    summary.proof_ok = verify_proof(leaf, proof, observer=record_step if args.trace else None)
    summary.root = digest_to_hex(proof.root)

    if args.root:
        summary.root_ok = proof.root == digest_from_hex(args.root)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if summary.all_ok else EXIT_VERIFICATION_FAILED

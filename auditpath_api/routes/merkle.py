"""
Merkle Routes

Build trees, generate proofs and verify leaves over HTTP. Nothing is
stored between requests; every call rebuilds what it needs.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from auditpath.crypto.hashing import digest_from_hex, digest_to_hex
from auditpath.merkle.merkle_proofs import generate_proof, verify_proof
from auditpath.merkle.merkle_tree import Node, build_merkle_tree
from auditpath.schemas.wire import ProofDocument, TreeDocument
from auditpath_api.models.requests import BuildTreeRequest, ProveRequest, VerifyRequest
from auditpath_api.models.responses import ProofResponse, TreeResponse, VerifyResponse


logger = logging.getLogger(__name__)

router = APIRouter(tags=["merkle"])


def _decode_leaves(leaves: list[str | None]) -> list[Node]:
    return [None if leaf is None else digest_from_hex(leaf) for leaf in leaves]


@router.post("/trees", response_model=TreeResponse)
def build_tree(request: BuildTreeRequest) -> TreeResponse:
    """
    Build a Merkle tree.

    Returns sizes, root and optionally every slot.
    """
    tree = build_merkle_tree(_decode_leaves(request.leaves))
    logger.info(f"Built tree: leaves={tree.leaf_count} width={tree.width}")
    return TreeResponse(tree=TreeDocument.from_tree(tree, include_nodes=request.include_nodes))


@router.post("/proofs", response_model=ProofResponse)
def prove_leaf(request: ProveRequest) -> ProofResponse:
    """
    Generate the audit path for a leaf.

    Responds 404 LEAF_NOT_FOUND when the target is not a leaf.
    """
    target = digest_from_hex(request.target)
    tree = build_merkle_tree(_decode_leaves(request.leaves))
    proof = generate_proof(target, tree)
    return ProofResponse(proof=ProofDocument.from_proof(proof, leaf=target))


@router.post("/verify", response_model=VerifyResponse)
def verify_leaf(request: VerifyRequest) -> VerifyResponse:
    """
    Verify a leaf against a proof.

    A proof that does not match is reported as valid=false with status
    200; only malformed input is an error.
    """
    leaf = digest_from_hex(request.leaf)
    proof = request.proof.to_proof()
    valid = verify_proof(leaf, proof)
    root_ok = None
    if request.root is not None:
        root_ok = proof.root == digest_from_hex(request.root)

    return VerifyResponse(
        valid=valid,
        root=digest_to_hex(proof.root),
        root_ok=root_ok,
    )

"""
API Request Models

Pydantic models for API request validation. Digests are carried as hex
strings and decoded in the route handlers.
"""

from pydantic import BaseModel, Field

from auditpath.schemas.wire import ProofDocument


class BuildTreeRequest(BaseModel):
    """Request body for POST /trees."""

    leaves: list[str | None] = Field(
        ...,
        description="Ordered leaf digests as 64-char hex; null marks an absent leaf",
    )
    include_nodes: bool = Field(
        default=False,
        description="Include every tree slot in the response",
    )


class ProveRequest(BaseModel):
    """Request body for POST /proofs."""

    leaves: list[str | None] = Field(
        ...,
        description="Ordered leaf digests as 64-char hex; null marks an absent leaf",
    )
    target: str = Field(..., description="Leaf digest to prove")


class VerifyRequest(BaseModel):
    """Request body for POST /verify."""

    leaf: str = Field(..., description="Claimed leaf digest")
    proof: ProofDocument = Field(..., description="Proof as returned by POST /proofs")
    root: str | None = Field(
        default=None,
        description="Optional trusted root the proof must end in",
    )

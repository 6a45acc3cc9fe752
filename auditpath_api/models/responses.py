"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from auditpath.schemas.wire import ProofDocument, TreeDocument


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "auditpath-api"
    version: str = "v1"


class TreeResponse(BaseModel):
    """Response for POST /trees."""

    ok: bool = True
    tree: TreeDocument


class ProofResponse(BaseModel):
    """Response for POST /proofs."""

    ok: bool = True
    proof: ProofDocument


class VerifyResponse(BaseModel):
    """Response for POST /verify. A mismatching proof is valid=false, not an error."""

    ok: bool = True
    valid: bool = Field(..., description="Whether the leaf verified against the proof")
    root: str = Field(..., description="Root digest the proof terminates in")
    root_ok: bool | None = Field(
        default=None,
        description="Whether the proof root equals the trusted root, if one was given",
    )


class ErrorDetail(BaseModel):
    """Error detail in responses."""

    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail

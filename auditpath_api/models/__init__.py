"""API request and response models."""

from auditpath_api.models.requests import BuildTreeRequest, ProveRequest, VerifyRequest
from auditpath_api.models.responses import (
    HealthResponse,
    TreeResponse,
    ProofResponse,
    VerifyResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "BuildTreeRequest",
    "ProveRequest",
    "VerifyRequest",
    "HealthResponse",
    "TreeResponse",
    "ProofResponse",
    "VerifyResponse",
    "ErrorDetail",
    "ErrorResponse",
]

"""
Module 00 - Schemas
File: errors.py

Purpose: Standard error taxonomy for tree building, proof generation,
proof verification and digest parsing. Defines both Pydantic models for
structured error communication and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree construction
    EMPTY_INPUT = "EMPTY_INPUT"

    # Proof generation
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"

    # Proof verification
    MALFORMED_PROOF = "MALFORMED_PROOF"

    # Textual digest boundary
    INVALID_ENCODING = "INVALID_ENCODING"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AuditPathError(BaseModel):
    """
    Base error model for structured error communication.

    Used by the CLI and HTTP surfaces to report failures without
    exceptions, enabling serialization of the failure.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.LEAF_NOT_FOUND],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AuditPathException(Exception):
    """
    Base exception for all audit path errors.

    Carries structured error information and can be converted to an
    AuditPathError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "AUDITPATH_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> AuditPathError:
        """Convert this exception to an AuditPathError model."""
        return AuditPathError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(AuditPathException):
    """Raised when a tree is requested over zero leaves."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from an empty leaf list",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
        )


class LeafNotFoundException(AuditPathException):
    """Raised when a proof is requested for a digest not among the leaves."""

    def __init__(
        self,
        message: str,
        target: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if target:
            full_details["target"] = target
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=full_details,
        )


class MalformedProofException(AuditPathException):
    """Raised when a proof's shape is invalid (not merely mismatching)."""

    def __init__(
        self,
        message: str,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if reason:
            full_details["reason"] = reason
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF,
            details=full_details,
        )


class InvalidEncodingException(AuditPathException):
    """Raised when a digest's textual or byte form is malformed."""

    def __init__(
        self,
        message: str,
        length: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if length is not None:
            full_details["length"] = length
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ENCODING,
            details=full_details,
        )

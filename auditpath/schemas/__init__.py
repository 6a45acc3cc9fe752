"""
Module 00 - Schemas
File: __init__.py

Purpose: Export the error taxonomy. Wire models live in
auditpath.schemas.wire and are imported from there directly.
"""

from .errors import (
    AuditPathError,
    AuditPathException,
    EmptyInputException,
    ErrorCodes,
    InvalidEncodingException,
    LeafNotFoundException,
    MalformedProofException,
)

__all__ = [
    "AuditPathError",
    "AuditPathException",
    "EmptyInputException",
    "ErrorCodes",
    "InvalidEncodingException",
    "LeafNotFoundException",
    "MalformedProofException",
]

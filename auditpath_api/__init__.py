"""
Minimal API (FastAPI)

HTTP API for Merkle audit paths:
- POST /trees - Build a tree
- POST /proofs - Generate a proof for a leaf
- POST /verify - Verify a leaf against a proof
- GET /health - Health check

Usage:
    uvicorn auditpath_api.app:app --reload
"""

__version__ = "0.1.0"

"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn auditpath_api.app:app --reload

    # Or run directly
    python -m auditpath_api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auditpath.config.runtime import get_default_config
from auditpath.schemas.errors import AuditPathException
from auditpath_api.routes import health, merkle
from auditpath_api.errors import (
    auditpath_error_handler,
    generic_error_handler,
)


# Configure logging from AUDITPATH_LOG_LEVEL / runtime config
logging.basicConfig(
    level=getattr(logging, get_default_config().logging.level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="auditpath API",
        description="""
HTTP API for Merkle tree audit paths.

## Endpoints

- **POST /trees** - Build a tree over hex leaf digests
- **POST /proofs** - Generate the audit path for one leaf
- **POST /verify** - Verify a leaf against an audit path
- **GET /health** - Health check

## Outcomes

- A proof that does not match is `200` with `valid: false`
- A target that is not a leaf is `404 LEAF_NOT_FOUND`
- Empty input, malformed hex or a malformed proof is `400`
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(AuditPathException, auditpath_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(merkle.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

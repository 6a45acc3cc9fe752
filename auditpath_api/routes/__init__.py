"""API route handlers."""

from auditpath_api.routes import health, merkle

__all__ = ["health", "merkle"]

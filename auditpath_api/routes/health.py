"""
Health Routes

GET /health and GET / report that the audit path service is up.
"""

from fastapi import APIRouter

from auditpath_api.models.responses import HealthResponse


router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe; the service keeps no state worth checking."""
    return HealthResponse()


@router.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    return await health_check()

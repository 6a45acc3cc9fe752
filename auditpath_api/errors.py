"""
API Error Handling

Standardized error handling for the API.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from auditpath.schemas.errors import AuditPathException, ErrorCodes
from auditpath_api.models.responses import ErrorResponse, ErrorDetail


logger = logging.getLogger(__name__)

# HTTP status per library error code
STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.EMPTY_INPUT: 400,
    ErrorCodes.INVALID_ENCODING: 400,
    ErrorCodes.MALFORMED_PROOF: 400,
    ErrorCodes.LEAF_NOT_FOUND: 404,
}


async def auditpath_error_handler(request: Request, exc: AuditPathException) -> JSONResponse:
    """Handle library exceptions, keeping their error code."""
    status_code = STATUS_BY_CODE.get(exc.code, 400)
    logger.info(f"{request.url.path}: {exc.code} {exc.message}")
    model = exc.to_error_model()
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(code=model.code, message=model.message, details=model.details),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )

"""Exception handlers mapping domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from engage.domain.error import (
    DepthExceededError,
    DomainError,
    ForbiddenError,
    InvalidTargetError,
    NotFoundError,
    TransientStoreFailure,
    UnauthorizedError,
    ValidationFailedError,
)

# Ordered most specific first; the first match wins
ERROR_STATUS: list[tuple[type[DomainError], int, str]] = [
    (UnauthorizedError, 401, "unauthorized"),
    (ForbiddenError, 403, "forbidden"),
    (NotFoundError, 404, "not_found"),
    (ValidationFailedError, 422, "validation_failed"),
    (DepthExceededError, 422, "depth_exceeded"),
    (InvalidTargetError, 409, "invalid_target"),
    (TransientStoreFailure, 503, "transient_store_failure"),
]


def create_json_error_response(status_code: int, message: str, error_type: str) -> JSONResponse:
    """Create JSON error response with a type for machine parsing."""
    return JSONResponse(
        status_code=status_code, content={"message": message, "type": error_type}
    )


async def domain_error_handler(request: Request, exc: Exception) -> Response:
    """Handle all DomainError subclasses with appropriate status codes."""
    status_code, error_type = 400, "bad_request"
    for error_class, code, name in ERROR_STATUS:
        if isinstance(exc, error_class):
            status_code, error_type = code, name
            break

    logfire.warn(
        "Request failed",
        path=request.url.path,
        status_code=status_code,
        error_type=error_type,
        error=str(exc),
    )
    response = create_json_error_response(status_code, str(exc), error_type)
    if isinstance(exc, TransientStoreFailure):
        response.headers["Retry-After"] = "1"
    return response


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on the application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, domain_error_handler)

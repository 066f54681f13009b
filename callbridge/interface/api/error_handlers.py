"""Exception handlers mapping domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from callbridge.domain.error import (
    ConflictError,
    DomainError,
    ExpiredError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)
from callbridge.util.jwt import JWTError

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (QuotaExceededError, status.HTTP_403_FORBIDDEN),
    (ExpiredError, status.HTTP_410_GONE),
]


def status_for(exc: DomainError) -> int:
    """HTTP status for a domain error (500 for unknown kinds)."""
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        code = status_for(exc)
        logfire.warn(
            "Domain error",
            error_type=type(exc).__name__,
            error=str(exc),
            path=request.url.path,
            status_code=code,
        )
        return JSONResponse(status_code=code, content={"detail": str(exc)})

    @app.exception_handler(JWTError)
    async def jwt_error_handler(request: Request, exc: JWTError):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": str(exc)}
        )

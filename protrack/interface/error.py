"""Interface layer errors and their HTTP mapping."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from protrack.domain.error import (
    AlreadyMember,
    DomainError,
    InvalidOrExpiredInvitation,
    InvitationAlreadyProcessed,
    InvitationAlreadySent,
    InvitationExpired,
    MissingTenantContext,
    NotFoundError,
    SubdomainInvalidFormat,
    SubdomainTaken,
    Unauthorized,
    UpstreamUnavailable,
    ValidationError,
)


STATUS_BY_ERROR: dict[type[DomainError], int] = {
    AlreadyMember: status.HTTP_409_CONFLICT,
    InvitationAlreadySent: status.HTTP_409_CONFLICT,
    InvitationAlreadyProcessed: status.HTTP_409_CONFLICT,
    SubdomainTaken: status.HTTP_409_CONFLICT,
    InvalidOrExpiredInvitation: status.HTTP_404_NOT_FOUND,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvitationExpired: status.HTTP_400_BAD_REQUEST,
    MissingTenantContext: status.HTTP_400_BAD_REQUEST,
    SubdomainInvalidFormat: 422,
    ValidationError: 422,
    Unauthorized: status.HTTP_403_FORBIDDEN,
    UpstreamUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error, walking its class hierarchy."""
    for cls in type(error).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return status.HTTP_400_BAD_REQUEST


async def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
    """Render a domain error as ``{"detail": ...}``."""
    code = status_for(exc)
    if code >= 500 or isinstance(exc, MissingTenantContext):
        logfire.error(
            "Request failed", path=request.url.path, error=str(exc), kind=type(exc).__name__
        )
    return JSONResponse(status_code=code, content={"detail": str(exc)})


async def handle_validation_error(request: Request, exc: Exception) -> JSONResponse:
    """Render a model validation error raised below the route layer."""
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to HTTP responses."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(PydanticValidationError, handle_validation_error)

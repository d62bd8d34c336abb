"""Session use cases."""

from protrack.application.usecase.session.authenticate import (
    AuthenticateRequest,
    AuthenticateUseCase,
)
from protrack.application.usecase.session.resolve_session import (
    ResolveSessionRequest,
    ResolveSessionResponse,
    ResolveSessionUseCase,
)

__all__ = [
    "AuthenticateRequest",
    "AuthenticateUseCase",
    "ResolveSessionRequest",
    "ResolveSessionResponse",
    "ResolveSessionUseCase",
]

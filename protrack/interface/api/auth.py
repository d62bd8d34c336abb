"""Bearer authentication for routes."""

from fastapi import HTTPException, status

from protrack.application.usecase.session import (
    AuthenticateRequest,
    AuthenticateUseCase,
)
from protrack.application.usecase.views import UserItem


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def require_user(
    authorization: str | None, authenticate_use_case: AuthenticateUseCase
) -> UserItem:
    """Resolve the caller or fail with 401.

    Raises:
        HTTPException: If the header is missing or the token is rejected
    """
    token = bearer_token(authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await authenticate_use_case.execute(AuthenticateRequest(access_token=token))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired access token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user

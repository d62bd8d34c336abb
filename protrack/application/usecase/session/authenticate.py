"""Authenticate use case."""

import logfire
from pydantic import BaseModel

from protrack.application.usecase.base import upstream
from protrack.application.usecase.views import UserItem
from protrack.domain.service import IdentityService, UserService


class AuthenticateRequest(BaseModel):
    """Authenticate request."""

    access_token: str


class AuthenticateUseCase:
    """Resolve a bearer token to the caller's user record.

    The record is created on first sight of the identity.
    """

    def __init__(
        self, identity_service: IdentityService, user_service: UserService
    ) -> None:
        self.identity_service = identity_service
        self.user_service = user_service

    async def execute(self, request: AuthenticateRequest) -> UserItem | None:
        """Authenticate the caller.

        Returns:
            The caller's user record, or None if the token was rejected

        Raises:
            UpstreamUnavailable: If the identity provider fails
        """
        with logfire.span("authenticate.execute"):
            with upstream("identity provider"):
                identity = await self.identity_service.authenticate(request.access_token)
            if identity is None:
                return None
            user = await self.user_service.ensure_user(identity)
            return UserItem.from_domain(user)

"""Join tenant use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from protrack.application.usecase.base import BaseUseCase
from protrack.application.usecase.views import UserItem
from protrack.domain.error import AlreadyMember, Unauthorized
from protrack.domain.service import InvitationService, UserService
from protrack.domain.value import InvitationToken, UserId


class JoinTenantRequest(BaseModel):
    """Join tenant request."""

    actor_id: str  # From authenticated user
    token: str = Field(min_length=1)


class JoinTenantResponse(BaseModel):
    """Join tenant response."""

    user: UserItem


class JoinTenantUseCase(BaseUseCase):
    """Use case for a signed-in identity joining the tenant it was invited to."""

    def __init__(
        self, invitation_service: InvitationService, user_service: UserService
    ) -> None:
        self.invitation_service = invitation_service
        self.user_service = user_service

    async def execute(self, request: JoinTenantRequest) -> JoinTenantResponse:
        """Execute join tenant flow.

        Raises:
            InvalidOrExpiredInvitation: If the token matches no pending invitation
            InvitationExpired: If the invitation is past its deadline
            Unauthorized: If the invitation was sent to another email, or the
                user already belongs to another tenant
            AlreadyMember: If the user already belongs to the tenant
            InvitationAlreadyProcessed: If another request consumed it first
        """
        token = InvitationToken(request.token)
        with logfire.span(
            "join_tenant.execute", actor_id=request.actor_id, token=token.redacted()
        ):
            actor = await self.user_service.get_by_id(UserId(UUID(request.actor_id)))
            invitation = await self.invitation_service.get_usable_by_token(token)

            if actor.email != invitation.email:
                logfire.warn(
                    "Invitation email mismatch",
                    invitation_id=str(invitation.id),
                    actor_id=str(actor.id),
                )
                raise Unauthorized("This invitation was sent to a different email")

            if actor.tenant_id == invitation.tenant_id:
                raise AlreadyMember(actor.email.root)

            if actor.tenant_id is not None:
                raise Unauthorized("User already belongs to another organization")

            user = await self.user_service.bind_to_tenant(
                actor.id,
                invitation.tenant_id,
                actor.name,
                actor.email,
                invitation.role,
                invitation.permissions,
            )
            await self.invitation_service.claim(invitation)

            logfire.info(
                "User joined tenant",
                user_id=str(user.id),
                tenant_id=str(invitation.tenant_id),
            )
            return JoinTenantResponse(user=UserItem.from_domain(user))

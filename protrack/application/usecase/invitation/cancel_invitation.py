"""Cancel invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from protrack.application.usecase.base import BaseUseCase
from protrack.application.usecase.views import InvitationItem
from protrack.domain.service import AccessService, InvitationService, UserService
from protrack.domain.value import AccessLevel, InvitationId, Resource, UserId


class CancelInvitationRequest(BaseModel):
    """Cancel invitation request."""

    actor_id: str  # From authenticated user
    invitation_id: str


class CancelInvitationResponse(BaseModel):
    """Cancel invitation response with the invitation as now stored."""

    invitation: InvitationItem


class CancelInvitationUseCase(BaseUseCase):
    """Use case for withdrawing an invitation."""

    def __init__(
        self,
        user_service: UserService,
        access_service: AccessService,
        invitation_service: InvitationService,
    ) -> None:
        self.user_service = user_service
        self.access_service = access_service
        self.invitation_service = invitation_service

    async def execute(self, request: CancelInvitationRequest) -> CancelInvitationResponse:
        with logfire.span(
            "cancel_invitation.execute",
            actor_id=request.actor_id,
            invitation_id=request.invitation_id,
        ):
            actor = await self.user_service.get_by_id(UserId(UUID(request.actor_id)))
            scope = self.access_service.require(actor, Resource.USERS, AccessLevel.WRITE)
            invitation_id = InvitationId(UUID(request.invitation_id))

            await self.invitation_service.cancel(scope, invitation_id)
            invitation = await self.invitation_service.get_in_tenant(scope, invitation_id)
            return CancelInvitationResponse(
                invitation=InvitationItem.from_domain(invitation)
            )

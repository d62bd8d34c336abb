"""List invitations use case."""

from uuid import UUID

from pydantic import BaseModel

from protrack.application.usecase.views import InvitationItem
from protrack.domain.service import AccessService, InvitationService, UserService
from protrack.domain.value import AccessLevel, Resource, UserId


class ListInvitationsRequest(BaseModel):
    """List invitations request."""

    actor_id: str  # From authenticated user


class ListInvitationsResponse(BaseModel):
    """Pending invitations of the actor's tenant, newest first."""

    invitations: list[InvitationItem]


class ListInvitationsUseCase:
    """Use case for listing pending invitations."""

    def __init__(
        self,
        user_service: UserService,
        access_service: AccessService,
        invitation_service: InvitationService,
    ) -> None:
        self.user_service = user_service
        self.access_service = access_service
        self.invitation_service = invitation_service

    async def execute(self, request: ListInvitationsRequest) -> ListInvitationsResponse:
        actor = await self.user_service.get_by_id(UserId(UUID(request.actor_id)))
        scope = self.access_service.require(actor, Resource.USERS, AccessLevel.READ)
        invitations = await self.invitation_service.list_pending(scope)
        return ListInvitationsResponse(
            invitations=[InvitationItem.from_domain(inv) for inv in invitations]
        )

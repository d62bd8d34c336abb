"""Get invitation use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from protrack.domain.error import NotFoundError
from protrack.domain.service import InvitationService, TenantService, UserService
from protrack.domain.value import InvitationToken, Role


class GetInvitationRequest(BaseModel):
    """Get invitation request."""

    token: str


class GetInvitationResponse(BaseModel):
    """Invitation details shown on the accept page."""

    invitation_id: str
    email: str
    role: Role
    permissions: dict[str, str]
    tenant_id: str
    tenant_name: str | None
    inviter_name: str | None
    expires_at: datetime


class GetInvitationUseCase:
    """Use case for looking up an invitation by its link token.

    Lets the frontend show who invited whom, and to which organization,
    before the invitee sets a password.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        tenant_service: TenantService,
        user_service: UserService,
    ) -> None:
        self.invitation_service = invitation_service
        self.tenant_service = tenant_service
        self.user_service = user_service

    async def execute(self, request: GetInvitationRequest) -> GetInvitationResponse:
        """Look up a pending, unexpired invitation.

        Raises:
            InvalidOrExpiredInvitation: If the token matches no pending invitation
            InvitationExpired: If the invitation is past its deadline
        """
        token = InvitationToken(request.token)
        with logfire.span("get_invitation.execute", token=token.redacted()):
            invitation = await self.invitation_service.get_usable_by_token(token)

            try:
                tenant = await self.tenant_service.get_by_id(invitation.tenant_id)
                tenant_name = tenant.name
            except NotFoundError:
                tenant_name = None

            inviter = await self.user_service.find_by_id(invitation.invited_by)

            return GetInvitationResponse(
                invitation_id=str(invitation.id),
                email=invitation.email.root,
                role=invitation.role,
                permissions=invitation.permissions.to_json(),
                tenant_id=str(invitation.tenant_id),
                tenant_name=tenant_name,
                inviter_name=inviter.name if inviter else None,
                expires_at=invitation.expires_at,
            )

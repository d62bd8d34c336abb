"""Issue invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from protrack.adapter.error import ProviderError
from protrack.application.usecase.base import BaseUseCase, upstream
from protrack.application.usecase.views import InvitationItem
from protrack.domain.error import AlreadyMember, ValidationError
from protrack.domain.service import (
    AccessService,
    IdentityService,
    InvitationDeliveryService,
    InvitationService,
    TenantService,
    UserService,
)
from protrack.domain.value import (
    AccessLevel,
    DeliveryChannel,
    Email,
    PermissionSet,
    Resource,
    Role,
    UserId,
)


class IssueInvitationRequest(BaseModel):
    """Issue invitation request."""

    actor_id: str  # From authenticated user
    email: str
    role: Role
    permissions: dict[Resource, AccessLevel] | None = None


class IssueInvitationResponse(BaseModel):
    """Issue invitation response.

    ``delivered`` is False when the email could not be sent; the invitation
    still exists and can be resent.
    """

    invitation: InvitationItem
    delivered: bool
    channel: DeliveryChannel | None = None


class IssueInvitationUseCase(BaseUseCase):
    """Use case for inviting an email address into the actor's tenant."""

    def __init__(
        self,
        user_service: UserService,
        access_service: AccessService,
        identity_service: IdentityService,
        invitation_service: InvitationService,
        delivery_service: InvitationDeliveryService,
        tenant_service: TenantService,
    ) -> None:
        """Initialize issue invitation use case.

        Args:
            user_service: User domain service
            access_service: Access control service
            identity_service: Identity provider service
            invitation_service: Invitation domain service
            delivery_service: Invitation delivery service
            tenant_service: Tenant domain service
        """
        self.user_service = user_service
        self.access_service = access_service
        self.identity_service = identity_service
        self.invitation_service = invitation_service
        self.delivery_service = delivery_service
        self.tenant_service = tenant_service

    async def execute(self, request: IssueInvitationRequest) -> IssueInvitationResponse:
        """Execute issue invitation flow.

        Steps:
        1. Check the actor may write users
        2. Refuse existing members and pending invitations
        3. Ask the provider whether the email has an identity
        4. Record the invitation
        5. Send the email; a failure here is logged, not raised
        """
        with logfire.span(
            "issue_invitation.execute",
            actor_id=request.actor_id,
            role=request.role.value,
        ):
            actor = await self.user_service.get_by_id(UserId(UUID(request.actor_id)))
            scope = self.access_service.require(actor, Resource.USERS, AccessLevel.WRITE)

            try:
                email = Email(request.email)
            except ValueError:
                raise ValidationError("Invalid email address")

            if await self.user_service.find_member_by_email(scope, email):
                raise AlreadyMember(email.root)
            await self.invitation_service.ensure_no_pending(scope, email)

            permissions = (
                PermissionSet(request.permissions)
                if request.permissions is not None
                else PermissionSet.for_role(request.role)
            )

            with upstream("identity provider"):
                has_identity = await self.identity_service.email_has_identity(email)

            invitation = await self.invitation_service.issue(
                scope, actor.id, email, request.role, permissions
            )
            tenant = await self.tenant_service.get_by_id(scope.tenant_id)

            try:
                channel = await self.delivery_service.deliver(
                    invitation, tenant.name, has_identity
                )
            except ProviderError as e:
                logfire.warn(
                    "Invitation email failed, invitation kept",
                    invitation_id=str(invitation.id),
                    error=str(e),
                )
                return IssueInvitationResponse(
                    invitation=InvitationItem.from_domain(invitation), delivered=False
                )

            return IssueInvitationResponse(
                invitation=InvitationItem.from_domain(invitation),
                delivered=True,
                channel=channel,
            )

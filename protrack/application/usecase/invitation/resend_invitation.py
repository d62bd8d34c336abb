"""Resend invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from protrack.application.usecase.base import BaseUseCase, upstream
from protrack.application.usecase.views import InvitationItem
from protrack.domain.error import InvitationAlreadyProcessed, UpstreamUnavailable
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
    InvitationId,
    InvitationStatus,
    Resource,
    UserId,
)


class ResendInvitationRequest(BaseModel):
    """Resend invitation request."""

    actor_id: str  # From authenticated user
    invitation_id: str


class ResendInvitationResponse(BaseModel):
    """Resend invitation response."""

    invitation: InvitationItem
    channel: DeliveryChannel


class ResendInvitationUseCase(BaseUseCase):
    """Use case for sending a pending invitation again with a fresh deadline."""

    def __init__(
        self,
        user_service: UserService,
        access_service: AccessService,
        identity_service: IdentityService,
        invitation_service: InvitationService,
        delivery_service: InvitationDeliveryService,
        tenant_service: TenantService,
    ) -> None:
        self.user_service = user_service
        self.access_service = access_service
        self.identity_service = identity_service
        self.invitation_service = invitation_service
        self.delivery_service = delivery_service
        self.tenant_service = tenant_service

    async def execute(self, request: ResendInvitationRequest) -> ResendInvitationResponse:
        """Execute resend flow.

        The renewed deadline (and rotated token) is stored before the email
        goes out, so the emailed link always matches the stored token. If
        delivery fails the previous token and deadline are put back.

        Raises:
            NotFoundError: If the invitation is unknown in the actor's tenant
            InvitationAlreadyProcessed: If the invitation is no longer pending
            UpstreamUnavailable: If the identity provider or mailer fails
        """
        with logfire.span(
            "resend_invitation.execute",
            actor_id=request.actor_id,
            invitation_id=request.invitation_id,
        ):
            actor = await self.user_service.get_by_id(UserId(UUID(request.actor_id)))
            scope = self.access_service.require(actor, Resource.USERS, AccessLevel.WRITE)

            invitation = await self.invitation_service.get_in_tenant(
                scope, InvitationId(UUID(request.invitation_id))
            )
            if invitation.status != InvitationStatus.PENDING:
                raise InvitationAlreadyProcessed(str(invitation.id))

            tenant = await self.tenant_service.get_by_id(scope.tenant_id)
            extended = await self.invitation_service.extend(invitation)

            try:
                with upstream("identity provider"):
                    has_identity = await self.identity_service.email_has_identity(
                        invitation.email
                    )
                    channel = await self.delivery_service.deliver(
                        extended, tenant.name, has_identity
                    )
            except UpstreamUnavailable:
                await self.invitation_service.restore(invitation)
                raise

            return ResendInvitationResponse(
                invitation=InvitationItem.from_domain(extended), channel=channel
            )

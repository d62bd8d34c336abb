"""Accept invitation use case."""

import logfire
from pydantic import BaseModel, Field, field_validator

from protrack.adapter.error import IdentityExistsError
from protrack.application.usecase.base import BaseUseCase, upstream
from protrack.application.usecase.views import UserItem
from protrack.domain.error import AlreadyMember, Unauthorized, UpstreamUnavailable
from protrack.domain.model import Invitation
from protrack.domain.service import IdentityService, InvitationService, UserService
from protrack.domain.value import Identity, InvitationToken


class AcceptInvitationRequest(BaseModel):
    """Accept invitation request."""

    token: str = Field(min_length=1)
    password: str = Field(min_length=6)
    name: str = Field(min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        """Reject names made of whitespace only."""
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()


class AcceptInvitationResponse(BaseModel):
    """Accept invitation response."""

    user: UserItem


class AcceptInvitationUseCase(BaseUseCase):
    """Use case for turning an invitation into a working account.

    Used by invitees who follow the emailed link and set a password there.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        identity_service: IdentityService,
        user_service: UserService,
    ) -> None:
        """Initialize accept invitation use case.

        Args:
            invitation_service: Invitation domain service
            identity_service: Identity provider service
            user_service: User domain service
        """
        self.invitation_service = invitation_service
        self.identity_service = identity_service
        self.user_service = user_service

    async def _establish_identity(
        self,
        invitation: Invitation,
        existing: Identity | None,
        request: AcceptInvitationRequest,
    ) -> tuple[Identity, bool]:
        """Set credentials on the invited email's identity, creating it if needed.

        Returns:
            The identity and whether this call created it
        """
        with upstream("identity provider"):
            if existing is None:
                try:
                    created = await self.identity_service.create_identity(
                        invitation.email, request.password, request.name
                    )
                    return created, True
                except IdentityExistsError:
                    # Registered between lookup and create
                    existing = await self.identity_service.find_by_email(
                        invitation.email
                    )
                    if existing is None:
                        raise UpstreamUnavailable(
                            "identity provider", "identity vanished after conflict"
                        )

            identity = await self.identity_service.update_credentials(
                existing.id, request.password, request.name
            )
            return identity, False

    async def _ensure_joinable(
        self, invitation: Invitation, existing: Identity | None
    ) -> None:
        """Refuse identities whose user record already has a tenant."""
        if existing is None:
            return
        user = await self.user_service.find_by_id(existing.id)
        if user is None or user.tenant_id is None:
            return
        if user.tenant_id == invitation.tenant_id:
            raise AlreadyMember(invitation.email.root)
        logfire.warn(
            "Invitee belongs to another tenant",
            invitation_id=str(invitation.id),
            user_id=str(user.id),
        )
        raise Unauthorized("User already belongs to another organization")

    async def execute(self, request: AcceptInvitationRequest) -> AcceptInvitationResponse:
        """Execute accept invitation flow.

        Steps:
        1. Load the pending invitation and check its deadline
        2. Look up the invited email's identity and refuse one that already
           belongs to a tenant
        3. Consume the invitation; only one request can win, and a loser
           stops here without touching the identity
        4. Set credentials on the identity, creating it if needed
        5. Upsert the user record bound to the invitation's tenant

        Every write shares the request transaction, so a failure after step 3
        releases the claim.

        Raises:
            InvalidOrExpiredInvitation: If the token matches no pending invitation
            InvitationExpired: If the invitation is past its deadline
            AlreadyMember: If the identity's user already belongs to the tenant
            Unauthorized: If the identity's user belongs to another tenant
            InvitationAlreadyProcessed: If another request consumed it first
            UpstreamUnavailable: If the identity provider fails
        """
        token = InvitationToken(request.token)
        with logfire.span("accept_invitation.execute", token=token.redacted()):
            invitation = await self.invitation_service.get_usable_by_token(token)

            with upstream("identity provider"):
                existing = await self.identity_service.find_by_email(invitation.email)
            await self._ensure_joinable(invitation, existing)

            await self.invitation_service.claim(invitation)

            identity, created = await self._establish_identity(
                invitation, existing, request
            )

            try:
                user = await self.user_service.bind_to_tenant(
                    identity.id,
                    invitation.tenant_id,
                    request.name,
                    invitation.email,
                    invitation.role,
                    invitation.permissions,
                )
            except Exception as e:
                logfire.error(
                    "User record upsert failed",
                    invitation_id=str(invitation.id),
                    identity_id=str(identity.id),
                    error=str(e),
                )
                if created:
                    await self._compensate(identity)
                raise

            logfire.info(
                "Invitation accepted",
                invitation_id=str(invitation.id),
                user_id=str(user.id),
                tenant_id=str(invitation.tenant_id),
                new_identity=created,
            )
            return AcceptInvitationResponse(user=UserItem.from_domain(user))

    async def _compensate(self, identity: Identity) -> None:
        """Delete an identity this request created."""
        try:
            with upstream("identity provider"):
                await self.identity_service.delete_identity(identity.id)
        except UpstreamUnavailable as e:
            logfire.error(
                "Compensating identity deletion failed",
                identity_id=str(identity.id),
                error=str(e),
            )

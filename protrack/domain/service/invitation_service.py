"""Invitation domain service."""

import secrets
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from protrack.domain.error import (
    InvalidOrExpiredInvitation,
    InvitationAlreadyProcessed,
    InvitationAlreadySent,
    InvitationExpired,
    NotFoundError,
)
from protrack.domain.model.invitation import Invitation
from protrack.domain.repository import InvitationRepository
from protrack.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    PermissionSet,
    Role,
    TenantScope,
    UserId,
)

from .base import Service


def generate_token() -> InvitationToken:
    """Generate an unguessable, URL-safe invitation token."""
    return InvitationToken(secrets.token_urlsafe(32))


class InvitationService(Service):
    """Domain service for the invitation ledger."""

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        expiry_days: int = 7,
        rotate_token_on_resend: bool = False,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            expiry_days: Validity window after issue or resend
            rotate_token_on_resend: Issue a fresh token on every resend
        """
        self.invitation_repository = invitation_repository
        self.expiry = timedelta(days=expiry_days)
        self.rotate_token_on_resend = rotate_token_on_resend

    async def ensure_no_pending(self, scope: TenantScope, email: Email) -> None:
        """Raise InvitationAlreadySent if the email has a pending invitation."""
        if await self.invitation_repository.exists_pending_for_email(scope, email):
            logfire.warn(
                "Pending invitation already exists",
                tenant_id=str(scope.tenant_id),
                email=email.root,
            )
            raise InvitationAlreadySent(email.root)

    async def issue(
        self,
        scope: TenantScope,
        inviter_id: UserId,
        email: Email,
        role: Role,
        permissions: PermissionSet,
    ) -> Invitation:
        """Record a new pending invitation.

        Args:
            scope: Tenant the invitation grants membership of
            inviter_id: Member issuing the invitation
            email: Invitee email
            role: Role label the invitee will receive
            permissions: Permission set the invitee will receive

        Returns:
            The created invitation

        Raises:
            InvitationAlreadySent: If a pending invitation exists for the email
        """
        with logfire.span(
            "invitation_service.issue",
            tenant_id=str(scope.tenant_id),
            inviter_id=str(inviter_id),
            email=email.root,
            role=role.value,
        ):
            await self.ensure_no_pending(scope, email)

            now = datetime.now(timezone.utc)
            invitation = Invitation(
                id=InvitationId(uuid4()),
                tenant_id=scope.tenant_id,
                email=email,
                role=role,
                permissions=permissions,
                invited_by=inviter_id,
                invitation_token=generate_token(),
                status=InvitationStatus.PENDING,
                expires_at=now + self.expiry,
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.invitation_repository.save(invitation)
            except IntegrityError:
                logfire.warn(
                    "Pending invitation created concurrently",
                    tenant_id=str(scope.tenant_id),
                    email=email.root,
                )
                raise InvitationAlreadySent(email.root)

            logfire.info(
                "Invitation issued",
                invitation_id=str(saved.id),
                tenant_id=str(scope.tenant_id),
                token=saved.invitation_token.redacted(),
            )
            return saved

    async def get_pending_by_token(self, token: InvitationToken) -> Invitation:
        """Get a pending invitation by token.

        Raises:
            InvalidOrExpiredInvitation: If no pending invitation has this token
        """
        with logfire.span(
            "invitation_service.get_pending_by_token", token=token.redacted()
        ):
            invitation = await self.invitation_repository.find_pending_by_token(token)
            if not invitation:
                logfire.warn("Pending invitation not found", token=token.redacted())
                raise InvalidOrExpiredInvitation()
            return invitation

    def ensure_usable(self, invitation: Invitation, now: datetime | None = None) -> None:
        """Refuse an invitation past its deadline.

        The stored status is left untouched.

        Raises:
            InvitationExpired: If the invitation has expired
        """
        now = now or datetime.now(timezone.utc)
        if invitation.is_expired(now):
            logfire.warn(
                "Invitation expired",
                invitation_id=str(invitation.id),
                expires_at=invitation.expires_at.isoformat(),
            )
            raise InvitationExpired()

    async def get_usable_by_token(self, token: InvitationToken) -> Invitation:
        """Get a pending, unexpired invitation by token."""
        invitation = await self.get_pending_by_token(token)
        self.ensure_usable(invitation)
        return invitation

    async def get_in_tenant(
        self, scope: TenantScope, invitation_id: InvitationId
    ) -> Invitation:
        """Get an invitation of a tenant.

        Raises:
            NotFoundError: If the invitation is unknown in the tenant
        """
        invitation = await self.invitation_repository.find_by_id(scope, invitation_id)
        if not invitation:
            raise NotFoundError("Invitation", str(invitation_id))
        return invitation

    async def claim(self, invitation: Invitation) -> None:
        """Consume an invitation exactly once.

        Raises:
            InvitationAlreadyProcessed: If another request consumed or
                cancelled it first
        """
        with logfire.span("invitation_service.claim", invitation_id=str(invitation.id)):
            claimed = await self.invitation_repository.transition_status(
                invitation.id, InvitationStatus.PENDING, InvitationStatus.ACCEPTED
            )
            if not claimed:
                logfire.warn(
                    "Invitation claimed by another request",
                    invitation_id=str(invitation.id),
                )
                raise InvitationAlreadyProcessed(str(invitation.id))
            logfire.info("Invitation accepted", invitation_id=str(invitation.id))

    async def extend(self, invitation: Invitation) -> Invitation:
        """Push the deadline of a pending invitation.

        Rotates the token in the same write when rotation is enabled. The
        write only lands while the stored row is still pending.

        Raises:
            InvitationAlreadyProcessed: If the invitation is no longer pending
        """
        with logfire.span("invitation_service.extend", invitation_id=str(invitation.id)):
            if invitation.status != InvitationStatus.PENDING:
                raise InvitationAlreadyProcessed(str(invitation.id))

            now = datetime.now(timezone.utc)
            token = (
                generate_token()
                if self.rotate_token_on_resend
                else invitation.invitation_token
            )
            renewed = await self.invitation_repository.renew(
                invitation.id, token, now + self.expiry, now
            )
            if renewed is None:
                logfire.warn(
                    "Invitation processed before it could be extended",
                    invitation_id=str(invitation.id),
                )
                raise InvitationAlreadyProcessed(str(invitation.id))

            logfire.info(
                "Invitation extended",
                invitation_id=str(renewed.id),
                expires_at=renewed.expires_at.isoformat(),
                rotated=self.rotate_token_on_resend,
            )
            return renewed

    async def restore(self, previous: Invitation) -> None:
        """Put back the token and deadline an extend replaced.

        Does nothing if the invitation stopped being pending meanwhile.
        """
        with logfire.span("invitation_service.restore", invitation_id=str(previous.id)):
            restored = await self.invitation_repository.renew(
                previous.id,
                previous.invitation_token,
                previous.expires_at,
                previous.updated_at,
            )
            logfire.info(
                "Invitation deadline restored",
                invitation_id=str(previous.id),
                changed=restored is not None,
            )

    async def cancel(self, scope: TenantScope, invitation_id: InvitationId) -> None:
        """Expire a pending invitation.

        Already accepted or expired invitations are left as they are.

        Raises:
            NotFoundError: If the invitation is unknown in the tenant
        """
        with logfire.span(
            "invitation_service.cancel",
            tenant_id=str(scope.tenant_id),
            invitation_id=str(invitation_id),
        ):
            invitation = await self.get_in_tenant(scope, invitation_id)
            cancelled = await self.invitation_repository.transition_status(
                invitation.id, InvitationStatus.PENDING, InvitationStatus.EXPIRED
            )
            logfire.info(
                "Invitation cancelled",
                invitation_id=str(invitation_id),
                changed=cancelled,
            )

    async def list_pending(self, scope: TenantScope) -> list[Invitation]:
        """List pending invitations of a tenant, newest first."""
        with logfire.span(
            "invitation_service.list_pending", tenant_id=str(scope.tenant_id)
        ):
            return await self.invitation_repository.list_pending(scope)

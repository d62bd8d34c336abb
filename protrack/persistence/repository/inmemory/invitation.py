"""In-memory invitation repository for testing."""

from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError

from protrack.domain.model import Invitation
from protrack.domain.repository import InvitationRepository
from protrack.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    TenantScope,
    require_scope,
)

from .store import InMemoryStore


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(
        self, scope: TenantScope | None, invitation_id: InvitationId
    ) -> Invitation | None:
        """Find an invitation by ID within a tenant."""
        scope = require_scope(scope, "find_by_id")
        invitation = self._store.invitations.get(invitation_id)
        if invitation and invitation.tenant_id == scope.tenant_id:
            return invitation
        return None

    async def find_pending_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find a pending invitation by token."""
        for invitation in self._store.invitations.values():
            if (
                invitation.invitation_token == token
                and invitation.status == InvitationStatus.PENDING
            ):
                return invitation
        return None

    async def exists_pending_for_email(
        self, scope: TenantScope | None, email: Email
    ) -> bool:
        """Check if a pending invitation exists for email in the tenant."""
        scope = require_scope(scope, "exists_pending_for_email")
        return self._find_pending_for_email(scope, email) is not None

    def _find_pending_for_email(
        self, scope: TenantScope, email: Email
    ) -> Invitation | None:
        for invitation in self._store.invitations.values():
            if (
                invitation.tenant_id == scope.tenant_id
                and invitation.email == email
                and invitation.status == InvitationStatus.PENDING
            ):
                return invitation
        return None

    async def list_pending(self, scope: TenantScope | None) -> list[Invitation]:
        """List pending invitations of a tenant, newest first."""
        scope = require_scope(scope, "list_pending")
        matches = [
            inv
            for inv in self._store.invitations.values()
            if inv.tenant_id == scope.tenant_id and inv.status == InvitationStatus.PENDING
        ]
        matches.sort(key=lambda inv: inv.created_at, reverse=True)
        return matches

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Raises:
            IntegrityError: If a pending invitation already exists for this
                tenant and email, or the token is not unique
        """
        async with self._store.lock:
            if invitation.id in self._store.invitations:
                self._store.invitations[invitation.id] = invitation
                return invitation

            scope = TenantScope(tenant_id=invitation.tenant_id)
            if self._find_pending_for_email(scope, invitation.email):
                raise IntegrityError("Duplicate pending invitation", None, Exception())

            if any(
                inv.invitation_token == invitation.invitation_token
                for inv in self._store.invitations.values()
            ):
                raise IntegrityError("Duplicate invitation token", None, Exception())

            self._store.invitations[invitation.id] = invitation
            return invitation

    async def transition_status(
        self,
        invitation_id: InvitationId,
        from_status: InvitationStatus,
        to_status: InvitationStatus,
    ) -> bool:
        """Atomically move an invitation from one status to another."""
        async with self._store.lock:
            invitation = self._store.invitations.get(invitation_id)
            if invitation is None or invitation.status != from_status:
                return False
            self._store.invitations[invitation_id] = invitation.model_copy(
                update={"status": to_status, "updated_at": datetime.now(timezone.utc)}
            )
            return True

    async def renew(
        self,
        invitation_id: InvitationId,
        token: InvitationToken,
        expires_at: datetime,
        updated_at: datetime,
    ) -> Invitation | None:
        """Set token and deadline of a pending invitation."""
        async with self._store.lock:
            invitation = self._store.invitations.get(invitation_id)
            if invitation is None or invitation.status != InvitationStatus.PENDING:
                return None
            renewed = invitation.model_copy(
                update={
                    "invitation_token": token,
                    "expires_at": expires_at,
                    "updated_at": updated_at,
                }
            )
            self._store.invitations[invitation_id] = renewed
            return renewed

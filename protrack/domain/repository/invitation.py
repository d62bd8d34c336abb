"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from protrack.domain.model.invitation import Invitation
from protrack.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    TenantScope,
)


class InvitationRepository(ABC):
    """Repository for Invitation entity (the invitation ledger).

    Lookup by token is global: the token itself is the capability. All
    management operations take an explicit tenant scope.
    """

    @abstractmethod
    async def find_by_id(
        self, scope: TenantScope | None, invitation_id: InvitationId
    ) -> Invitation | None:
        """Find an invitation by ID within a tenant.

        Raises:
            MissingTenantContext: If scope is None
        """
        pass

    @abstractmethod
    async def find_pending_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find a pending invitation by token.

        Used when an invitee opens the invitation link. The stored status is
        returned as-is; expiry is the caller's concern.

        Args:
            token: The invitation token

        Returns:
            The pending invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists_pending_for_email(
        self, scope: TenantScope | None, email: Email
    ) -> bool:
        """Check if a pending invitation exists for email in the tenant.

        Raises:
            MissingTenantContext: If scope is None
        """
        pass

    @abstractmethod
    async def list_pending(self, scope: TenantScope | None) -> list[Invitation]:
        """List pending invitations of a tenant, newest first.

        Raises:
            MissingTenantContext: If scope is None
        """
        pass

    @abstractmethod
    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Args:
            invitation: The invitation to save

        Returns:
            The saved invitation

        Raises:
            IntegrityError: If a pending invitation already exists for this
                tenant and email, or the token is not unique
        """
        pass

    @abstractmethod
    async def transition_status(
        self,
        invitation_id: InvitationId,
        from_status: InvitationStatus,
        to_status: InvitationStatus,
    ) -> bool:
        """Atomically move an invitation from one status to another.

        Only succeeds when the stored status equals ``from_status`` at the
        moment of the write, so concurrent callers cannot both win.

        Args:
            invitation_id: Invitation to update
            from_status: Expected current status
            to_status: New status

        Returns:
            True if this call performed the transition, False otherwise
        """
        pass

    @abstractmethod
    async def renew(
        self,
        invitation_id: InvitationId,
        token: InvitationToken,
        expires_at: datetime,
        updated_at: datetime,
    ) -> Invitation | None:
        """Set token and deadline of an invitation that is still pending.

        A single conditional write; status and every other column are left
        alone, so an invitation accepted or cancelled meanwhile stays so.

        Returns:
            The renewed invitation, or None if it is no longer pending
        """
        pass

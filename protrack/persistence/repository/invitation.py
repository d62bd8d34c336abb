"""PostgreSQL implementation of Invitation repository."""

from datetime import datetime

from sqlalchemy import and_, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

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
from protrack.persistence.mappers import invitation_to_dict, row_to_invitation
from protrack.persistence.tables import user_invitations_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, scope: TenantScope | None, invitation_id: InvitationId
    ) -> Invitation | None:
        """Find an invitation by ID within a tenant."""
        scope = require_scope(scope, "find_by_id")
        stmt = select(user_invitations_table).where(
            and_(
                user_invitations_table.c.id == invitation_id,
                user_invitations_table.c.tenant_id == scope.tenant_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_pending_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find a pending invitation by token.

        Args:
            token: Invitation token to look up

        Returns:
            Invitation if found, None otherwise
        """
        stmt = select(user_invitations_table).where(
            and_(
                user_invitations_table.c.invitation_token == token.root,
                user_invitations_table.c.status == InvitationStatus.PENDING.value,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def exists_pending_for_email(
        self, scope: TenantScope | None, email: Email
    ) -> bool:
        """Check if a pending invitation exists for email in the tenant.

        Fast check without loading full invitation data.
        """
        scope = require_scope(scope, "exists_pending_for_email")
        stmt = select(user_invitations_table.c.id).where(
            and_(
                user_invitations_table.c.tenant_id == scope.tenant_id,
                func.lower(user_invitations_table.c.email) == email.root,
                user_invitations_table.c.status == InvitationStatus.PENDING.value,
            )
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def list_pending(self, scope: TenantScope | None) -> list[Invitation]:
        """List pending invitations of a tenant, newest first."""
        scope = require_scope(scope, "list_pending")
        stmt = (
            select(user_invitations_table)
            .where(
                and_(
                    user_invitations_table.c.tenant_id == scope.tenant_id,
                    user_invitations_table.c.status == InvitationStatus.PENDING.value,
                )
            )
            .order_by(user_invitations_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Inserts run in a savepoint so a unique violation on the pending
        email index leaves the request transaction usable.

        Raises:
            IntegrityError: If a pending invitation already exists for this
                tenant and email, or the token is not unique
        """
        values = invitation_to_dict(invitation)

        exists = await self.session.execute(
            select(user_invitations_table.c.id).where(
                user_invitations_table.c.id == invitation.id
            )
        )

        if exists.first():
            stmt = (
                update(user_invitations_table)
                .where(user_invitations_table.c.id == invitation.id)
                .values(**values)
            )
            await self.session.execute(stmt)
        else:
            async with self.session.begin_nested():
                await self.session.execute(insert(user_invitations_table).values(**values))

        await self.session.flush()
        return invitation

    async def transition_status(
        self,
        invitation_id: InvitationId,
        from_status: InvitationStatus,
        to_status: InvitationStatus,
    ) -> bool:
        """Atomically move an invitation from one status to another.

        A single conditional UPDATE; the row lock it takes makes a concurrent
        caller re-check the status and match zero rows. Runs in a savepoint so
        a failure here leaves earlier writes of the request intact.
        """
        stmt = (
            update(user_invitations_table)
            .where(
                and_(
                    user_invitations_table.c.id == invitation_id,
                    user_invitations_table.c.status == from_status.value,
                )
            )
            .values(status=to_status.value, updated_at=func.now())
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def renew(
        self,
        invitation_id: InvitationId,
        token: InvitationToken,
        expires_at: datetime,
        updated_at: datetime,
    ) -> Invitation | None:
        """Set token and deadline of a pending invitation.

        Guarded by ``status = 'pending'`` like transition_status, so it can
        never resurrect an accepted or cancelled invitation.
        """
        stmt = (
            update(user_invitations_table)
            .where(
                and_(
                    user_invitations_table.c.id == invitation_id,
                    user_invitations_table.c.status == InvitationStatus.PENDING.value,
                )
            )
            .values(
                invitation_token=token.root,
                expires_at=expires_at,
                updated_at=updated_at,
            )
            .returning(user_invitations_table)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

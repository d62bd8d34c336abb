"""Invitation entity.

An invitation is a time-bounded capability token granting membership of a
tenant with a predefined role and permission set.
"""

from datetime import datetime, timezone

from pydantic import Field

from protrack.domain.model.common import DomainModel
from protrack.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    PermissionSet,
    Role,
    TenantId,
    UserId,
)


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - At most one pending invitation per email and tenant
    - Expiry is computed from expires_at on every use; status is not
      rewritten when the deadline passes
    - pending -> accepted and pending -> expired are the only transitions
    - Resending extends expires_at and keeps the token
    """

    id: InvitationId
    tenant_id: TenantId
    email: Email
    role: Role
    permissions: PermissionSet
    invited_by: UserId
    invitation_token: InvitationToken
    status: InvitationStatus = InvitationStatus.PENDING
    expires_at: datetime
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def is_expired(self, now: datetime) -> bool:
        """Whether the invitation is past its deadline at ``now``."""
        return now > self.expires_at

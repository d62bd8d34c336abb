"""User record.

The tenant-scoped profile bound to an external identity. The record id is
the identity provider's id.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from protrack.domain.model.common import DomainModel
from protrack.domain.value import Email, PermissionSet, Role, TenantId, UserId


class User(DomainModel):
    """User record.

    Business rules:
    - Created lazily with no tenant the first time an identity is seen
    - tenant_id is set once (tenant creation or invitation acceptance)
    - Never hard-deleted; deactivation clears is_active
    - Authorization reads permissions, never role
    """

    id: UserId
    tenant_id: Optional[TenantId] = None
    name: str
    email: Email
    role: Role = Role.ENTRY
    permissions: PermissionSet = Field(default_factory=PermissionSet.unassigned)
    is_active: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

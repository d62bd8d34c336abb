"""Response items shared by several use cases."""

from datetime import datetime

from pydantic import BaseModel

from protrack.domain.model import Invitation, Tenant, User
from protrack.domain.value import InvitationStatus, Role, TenantStatus


class UserItem(BaseModel):
    """User record as returned to clients."""

    user_id: str
    tenant_id: str | None
    name: str
    email: str
    role: Role
    permissions: dict[str, str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserItem":
        return cls(
            user_id=str(user.id),
            tenant_id=str(user.tenant_id) if user.tenant_id else None,
            name=user.name,
            email=user.email.root,
            role=user.role,
            permissions=user.permissions.to_json(),
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class TenantItem(BaseModel):
    """Tenant as returned to clients."""

    tenant_id: str
    subdomain: str
    name: str
    email: str
    phone: str | None
    plan: str
    status: TenantStatus
    created_at: datetime

    @classmethod
    def from_domain(cls, tenant: Tenant) -> "TenantItem":
        return cls(
            tenant_id=str(tenant.id),
            subdomain=tenant.subdomain.root,
            name=tenant.name,
            email=tenant.email,
            phone=tenant.phone,
            plan=tenant.plan,
            status=tenant.status,
            created_at=tenant.created_at,
        )


class InvitationItem(BaseModel):
    """Invitation as listed to tenant administrators.

    The token is never part of it.
    """

    invitation_id: str
    email: str
    role: Role
    permissions: dict[str, str]
    invited_by: str
    status: InvitationStatus
    expires_at: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, invitation: Invitation) -> "InvitationItem":
        return cls(
            invitation_id=str(invitation.id),
            email=invitation.email.root,
            role=invitation.role,
            permissions=invitation.permissions.to_json(),
            invited_by=str(invitation.invited_by),
            status=invitation.status,
            expires_at=invitation.expires_at,
            created_at=invitation.created_at,
            updated_at=invitation.updated_at,
        )

"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from protrack.domain.model import Invitation, Tenant, User
from protrack.domain.value import (
    AccessLevel,
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    PermissionSet,
    Resource,
    Role,
    Subdomain,
    TenantId,
    TenantStatus,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_permissions(data: Dict[str, str] | None) -> PermissionSet:
    """Convert a stored permissions object to a PermissionSet.

    Unknown resource keys are ignored; missing ones read as ``none``.
    """
    known = {resource.value for resource in Resource}
    return PermissionSet(
        {
            Resource(key): AccessLevel(level)
            for key, level in (data or {}).items()
            if key in known
        }
    )


def row_to_tenant(row: Dict[str, Any]) -> Tenant:
    """Convert database row to Tenant domain model."""
    return Tenant(
        id=TenantId(_uuid(row["id"])),
        subdomain=Subdomain(row["subdomain"]),
        name=row["name"],
        email=row["email"],
        phone=row.get("phone"),
        plan=row["plan"],
        status=TenantStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def tenant_to_dict(tenant: Tenant) -> Dict[str, Any]:
    """Convert Tenant domain model to database dict."""
    return {
        "id": tenant.id,
        "subdomain": tenant.subdomain.root,
        "name": tenant.name,
        "email": tenant.email,
        "phone": tenant.phone,
        "plan": tenant.plan,
        "status": tenant.status.value,
        "created_at": tenant.created_at,
        "updated_at": tenant.updated_at,
    }


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        tenant_id=TenantId(_uuid(row["tenant_id"])) if row.get("tenant_id") else None,
        name=row["name"],
        email=Email(row["email"]),
        role=Role(row["role"]),
        permissions=row_to_permissions(row.get("permissions")),
        is_active=row["is_active"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "tenant_id": user.tenant_id,
        "name": user.name,
        "email": user.email.root,
        "role": user.role.value,
        "permissions": user.permissions.to_json(),
        "is_active": user.is_active,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model."""
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        tenant_id=TenantId(_uuid(row["tenant_id"])),
        email=Email(row["email"]),
        role=Role(row["role"]),
        permissions=row_to_permissions(row.get("permissions")),
        invited_by=UserId(_uuid(row["invited_by"])),
        invitation_token=InvitationToken(row["invitation_token"]),
        status=InvitationStatus(row["status"]),
        expires_at=row["expires_at"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict."""
    return {
        "id": invitation.id,
        "tenant_id": invitation.tenant_id,
        "email": invitation.email.root,
        "role": invitation.role.value,
        "permissions": invitation.permissions.to_json(),
        "invited_by": invitation.invited_by,
        "invitation_token": invitation.invitation_token.root,
        "status": invitation.status.value,
        "expires_at": invitation.expires_at,
        "created_at": invitation.created_at,
        "updated_at": invitation.updated_at,
    }

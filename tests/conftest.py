"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire
from dishka import AsyncContainer

from protrack.adapter.supabase import MockIdentityProvider
from protrack.domain.model import Invitation, Tenant, User
from protrack.domain.repository import (
    InvitationRepository,
    TenantRepository,
    UserRepository,
)
from protrack.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    PermissionSet,
    Role,
    Subdomain,
    TenantId,
)

# Keep spans local; the app module instruments on import
logfire.configure(send_to_logfire=False, console=False)


async def seed_tenant(
    env: AsyncContainer, subdomain: str = "acme", name: str = "Acme Builders"
) -> Tenant:
    """Insert a tenant directly through the repository."""
    repo = await env.get(TenantRepository)
    return await repo.create(
        Tenant(
            id=TenantId(uuid4()),
            subdomain=Subdomain(subdomain),
            name=name,
            email=f"office@{subdomain}.example.com",
        )
    )


async def seed_member(
    env: AsyncContainer,
    tenant: Tenant | None,
    email: str,
    role: Role = Role.MASTER,
    permissions: PermissionSet | None = None,
    is_active: bool = True,
) -> User:
    """Register an identity and the user record bound to it.

    Pass ``tenant=None`` for a signed-up user who has not joined a tenant.
    """
    identity_provider = await env.get(MockIdentityProvider)
    identity = identity_provider.register(email, display_name=email.split("@")[0])

    repo = await env.get(UserRepository)
    return await repo.save(
        User(
            id=identity.id,
            tenant_id=tenant.id if tenant else None,
            name=identity.display_name,
            email=identity.email,
            role=role if tenant else Role.ENTRY,
            permissions=permissions
            or (PermissionSet.for_role(role) if tenant else PermissionSet.unassigned()),
            is_active=is_active,
        )
    )


async def seed_invitation(
    env: AsyncContainer,
    tenant: Tenant,
    inviter: User,
    email: str,
    role: Role = Role.ENTRY,
    token: str | None = None,
    expires_in: timedelta = timedelta(days=7),
    status: InvitationStatus = InvitationStatus.PENDING,
) -> Invitation:
    """Insert an invitation directly through the repository."""
    repo = await env.get(InvitationRepository)
    return await repo.save(
        Invitation(
            id=InvitationId(uuid4()),
            tenant_id=tenant.id,
            email=Email(email),
            role=role,
            permissions=PermissionSet.for_role(role),
            invited_by=inviter.id,
            invitation_token=InvitationToken(token or f"tok-{uuid4().hex}"),
            status=status,
            expires_at=datetime.now(timezone.utc) + expires_in,
        )
    )

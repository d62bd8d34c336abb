"""User domain service."""

from datetime import datetime, timezone

import logfire

from protrack.domain.error import NotFoundError, Unauthorized, ValidationError
from protrack.domain.model import User
from protrack.domain.repository import UserRepository
from protrack.domain.value import (
    Email,
    Identity,
    PermissionSet,
    Role,
    TenantId,
    TenantScope,
    UserId,
)

from .base import Service


class UserService(Service):
    """Domain service for user record operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def find_by_id(self, user_id: UserId) -> User | None:
        """Find user by ID, None if the identity has no record yet."""
        return await self.user_repository.find_by_id(user_id)

    async def ensure_user(self, identity: Identity) -> User:
        """Return the identity's user record, creating it on first sight.

        A lazily created record has no tenant, role entry and read-only
        permissions with no access to user management.

        Args:
            identity: Authenticated identity

        Returns:
            Existing or newly created user record
        """
        with logfire.span("user_service.ensure_user", user_id=str(identity.id)):
            existing = await self.user_repository.find_by_id(identity.id)
            if existing:
                return existing

            user = User(
                id=identity.id,
                tenant_id=None,
                name=identity.display_name or identity.email.root.split("@")[0],
                email=identity.email,
                role=Role.ENTRY,
                permissions=PermissionSet.unassigned(),
                is_active=True,
            )
            saved = await self.user_repository.save(user)
            logfire.info("User record created lazily", user_id=str(identity.id))
            return saved

    async def find_member_by_email(self, scope: TenantScope, email: Email) -> User | None:
        """Find a tenant member by email."""
        with logfire.span(
            "user_service.find_member_by_email",
            tenant_id=str(scope.tenant_id),
            email=email.root,
        ):
            return await self.user_repository.find_by_email_in_tenant(scope, email)

    async def get_member(self, scope: TenantScope, user_id: UserId) -> User:
        """Get a tenant member.

        Raises:
            NotFoundError: If the user is not a member of the tenant
        """
        user = await self.user_repository.find_in_tenant(scope, user_id)
        if not user:
            raise NotFoundError("User", str(user_id))
        return user

    async def list_members(self, scope: TenantScope) -> list[User]:
        """List users of a tenant, oldest first."""
        with logfire.span("user_service.list_members", tenant_id=str(scope.tenant_id)):
            users = await self.user_repository.list_by_tenant(scope)
            logfire.info(
                "Tenant users listed", tenant_id=str(scope.tenant_id), count=len(users)
            )
            return users

    async def bind_to_tenant(
        self,
        user_id: UserId,
        tenant_id: TenantId,
        name: str,
        email: Email,
        role: Role,
        permissions: PermissionSet,
    ) -> User:
        """Upsert a user record bound to a tenant.

        Keyed by the identity id, so repeating it overwrites the same record.
        A record already bound to another tenant is never moved.

        Raises:
            Unauthorized: If the user belongs to another tenant
        """
        with logfire.span(
            "user_service.bind_to_tenant",
            user_id=str(user_id),
            tenant_id=str(tenant_id),
            role=role.value,
        ):
            existing = await self.user_repository.find_by_id(user_id)
            if existing and existing.tenant_id not in (None, tenant_id):
                logfire.warn(
                    "User bound to another tenant",
                    user_id=str(user_id),
                    tenant_id=str(existing.tenant_id),
                )
                raise Unauthorized("User already belongs to another organization")
            now = datetime.now(timezone.utc)
            user = User(
                id=user_id,
                tenant_id=tenant_id,
                name=name,
                email=email,
                role=role,
                permissions=permissions,
                is_active=True,
                created_at=existing.created_at if existing else now,
                updated_at=now,
            )
            saved = await self.user_repository.save(user)
            logfire.info(
                "User bound to tenant", user_id=str(user_id), tenant_id=str(tenant_id)
            )
            return saved

    async def update_access(
        self,
        scope: TenantScope,
        actor: User,
        user_id: UserId,
        role: Role | None = None,
        permissions: PermissionSet | None = None,
        is_active: bool | None = None,
    ) -> User:
        """Change a member's role, permissions or active flag.

        A role change without explicit permissions re-applies the role's
        default template.

        Raises:
            NotFoundError: If the user is not a member of the tenant
            Unauthorized: If the actor tries to deactivate itself
        """
        with logfire.span(
            "user_service.update_access",
            tenant_id=str(scope.tenant_id),
            actor_id=str(actor.id),
            user_id=str(user_id),
        ):
            if is_active is False and user_id == actor.id:
                raise Unauthorized("Cannot deactivate yourself")

            if role is None and permissions is None and is_active is None:
                raise ValidationError("Nothing to update")

            user = await self.get_member(scope, user_id)

            updates: dict = {"updated_at": datetime.now(timezone.utc)}
            if role is not None:
                updates["role"] = role
                if permissions is None:
                    updates["permissions"] = PermissionSet.for_role(role)
            if permissions is not None:
                updates["permissions"] = permissions
            if is_active is not None:
                updates["is_active"] = is_active

            saved = await self.user_repository.save(user.model_copy(update=updates))
            logfire.info(
                "User access updated",
                tenant_id=str(scope.tenant_id),
                user_id=str(user_id),
                fields=sorted(k for k in updates if k != "updated_at"),
            )
            return saved

    async def deactivate(self, scope: TenantScope, actor: User, user_id: UserId) -> User:
        """Deactivate a member. Records are never deleted.

        Raises:
            Unauthorized: If the actor tries to deactivate itself
        """
        return await self.update_access(scope, actor, user_id, is_active=False)

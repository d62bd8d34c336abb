"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from protrack.domain.error import NotFoundError, Unauthorized, ValidationError
from protrack.domain.service import UserService
from protrack.domain.value import (
    AccessLevel,
    Email,
    Identity,
    PermissionSet,
    Resource,
    Role,
    TenantScope,
    UserId,
)
from tests.conftest import seed_member, seed_tenant
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestEnsureUser:
    """Tests for lazy user record creation."""

    @pytest.mark.asyncio
    async def test_creates_record_without_tenant(self, unit_env):
        service = await unit_env.get(UserService)
        identity = Identity(id=UserId(uuid4()), email=Email("solo@example.com"))

        user = await service.ensure_user(identity)

        assert user.id == identity.id
        assert user.tenant_id is None
        assert user.name == "solo"
        assert user.role == Role.ENTRY
        assert user.permissions.level(Resource.USERS) == AccessLevel.NONE
        assert user.permissions.level(Resource.MATERIAL) == AccessLevel.READ

    @pytest.mark.asyncio
    async def test_returns_existing_record(self, unit_env):
        service = await unit_env.get(UserService)
        tenant = await seed_tenant(unit_env)
        member = await seed_member(unit_env, tenant, "member@acme.com")

        user = await service.ensure_user(
            Identity(id=member.id, email=member.email, display_name="Changed")
        )

        assert user == member


class TestBindToTenant:
    """Tests for the membership upsert."""

    @pytest.mark.asyncio
    async def test_upsert_keeps_created_at(self, unit_env):
        service = await unit_env.get(UserService)
        user = await seed_member(unit_env, None, "joiner@example.com")
        tenant = await seed_tenant(unit_env)

        bound = await service.bind_to_tenant(
            user.id,
            tenant.id,
            "Joiner",
            user.email,
            Role.VIEW,
            PermissionSet.for_role(Role.VIEW),
        )

        assert bound.tenant_id == tenant.id
        assert bound.role == Role.VIEW
        assert bound.created_at == user.created_at

    @pytest.mark.asyncio
    async def test_bind_refuses_record_in_other_tenant(self, unit_env):
        service = await unit_env.get(UserService)
        home = await seed_tenant(unit_env, subdomain="home", name="Home Co")
        other = await seed_tenant(unit_env)
        user = await seed_member(unit_env, home, "settled@home.com")

        with pytest.raises(Unauthorized):
            await service.bind_to_tenant(
                user.id,
                other.id,
                "Settled",
                user.email,
                Role.VIEW,
                PermissionSet.for_role(Role.VIEW),
            )

        stored = await service.get_by_id(user.id)
        assert stored.tenant_id == home.id
        assert stored.role == Role.MASTER


class TestUpdateAccess:
    """Tests for role, permission and status changes."""

    @pytest.mark.asyncio
    async def test_role_change_applies_template(self, unit_env):
        service = await unit_env.get(UserService)
        tenant = await seed_tenant(unit_env)
        admin = await seed_member(unit_env, tenant, "admin@acme.com")
        member = await seed_member(unit_env, tenant, "member@acme.com", Role.VIEW)

        updated = await service.update_access(
            TenantScope(tenant_id=tenant.id), admin, member.id, role=Role.ENTRY
        )

        assert updated.role == Role.ENTRY
        assert updated.permissions == PermissionSet.for_role(Role.ENTRY)

    @pytest.mark.asyncio
    async def test_explicit_permissions_win_over_template(self, unit_env):
        service = await unit_env.get(UserService)
        tenant = await seed_tenant(unit_env)
        admin = await seed_member(unit_env, tenant, "admin@acme.com")
        member = await seed_member(unit_env, tenant, "member@acme.com", Role.VIEW)
        custom = PermissionSet({Resource.INVOICES: AccessLevel.WRITE})

        updated = await service.update_access(
            TenantScope(tenant_id=tenant.id),
            admin,
            member.id,
            role=Role.ENTRY,
            permissions=custom,
        )

        assert updated.permissions == custom

    @pytest.mark.asyncio
    async def test_self_deactivation_refused(self, unit_env):
        service = await unit_env.get(UserService)
        tenant = await seed_tenant(unit_env)
        admin = await seed_member(unit_env, tenant, "admin@acme.com")

        with pytest.raises(Unauthorized):
            await service.deactivate(TenantScope(tenant_id=tenant.id), admin, admin.id)

    @pytest.mark.asyncio
    async def test_empty_update_rejected(self, unit_env):
        service = await unit_env.get(UserService)
        tenant = await seed_tenant(unit_env)
        admin = await seed_member(unit_env, tenant, "admin@acme.com")
        member = await seed_member(unit_env, tenant, "member@acme.com")

        with pytest.raises(ValidationError):
            await service.update_access(
                TenantScope(tenant_id=tenant.id), admin, member.id
            )

    @pytest.mark.asyncio
    async def test_member_of_other_tenant_not_found(self, unit_env):
        service = await unit_env.get(UserService)
        acme = await seed_tenant(unit_env, "acme")
        globex = await seed_tenant(unit_env, "globex")
        admin = await seed_member(unit_env, acme, "admin@acme.com")
        outsider = await seed_member(unit_env, globex, "admin@globex.com")

        with pytest.raises(NotFoundError):
            await service.deactivate(TenantScope(tenant_id=acme.id), admin, outsider.id)

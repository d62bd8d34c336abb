"""Unit tests for user administration use cases."""

import pytest

from protrack.application.usecase.user import (
    DeactivateUserRequest,
    DeactivateUserUseCase,
    ListUsersRequest,
    ListUsersUseCase,
    UpdateUserRequest,
    UpdateUserUseCase,
)
from protrack.domain.error import Unauthorized
from protrack.domain.value import (
    AccessLevel,
    PermissionSet,
    Resource,
    Role,
)
from tests.conftest import seed_member, seed_tenant
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


@pytest.mark.asyncio
async def test_list_users_of_own_tenant_only(unit_env):
    use_case = await unit_env.get(ListUsersUseCase)
    acme = await seed_tenant(unit_env, "acme")
    globex = await seed_tenant(unit_env, "globex")
    admin = await seed_member(unit_env, acme, "admin@acme.com")
    await seed_member(unit_env, acme, "entry@acme.com", Role.ENTRY)
    await seed_member(unit_env, globex, "admin@globex.com")

    response = await use_case.execute(ListUsersRequest(actor_id=str(admin.id)))

    assert sorted(u.email for u in response.users) == ["admin@acme.com", "entry@acme.com"]


@pytest.mark.asyncio
async def test_update_role_applies_template(unit_env):
    use_case = await unit_env.get(UpdateUserUseCase)
    tenant = await seed_tenant(unit_env)
    admin = await seed_member(unit_env, tenant, "admin@acme.com")
    viewer = await seed_member(unit_env, tenant, "viewer@acme.com", Role.VIEW)

    item = await use_case.execute(
        UpdateUserRequest(actor_id=str(admin.id), user_id=str(viewer.id), role=Role.MASTER)
    )

    assert item.role == Role.MASTER
    assert item.permissions["users"] == "write"


@pytest.mark.asyncio
async def test_update_needs_users_write(unit_env):
    use_case = await unit_env.get(UpdateUserUseCase)
    tenant = await seed_tenant(unit_env)
    # Master label, read-only users permission
    reader = await seed_member(
        unit_env,
        tenant,
        "reader@acme.com",
        Role.MASTER,
        PermissionSet({Resource.USERS: AccessLevel.READ}),
    )
    viewer = await seed_member(unit_env, tenant, "viewer@acme.com", Role.VIEW)

    with pytest.raises(Unauthorized):
        await use_case.execute(
            UpdateUserRequest(
                actor_id=str(reader.id), user_id=str(viewer.id), role=Role.ENTRY
            )
        )


@pytest.mark.asyncio
async def test_deactivate_member(unit_env):
    use_case = await unit_env.get(DeactivateUserUseCase)
    tenant = await seed_tenant(unit_env)
    admin = await seed_member(unit_env, tenant, "admin@acme.com")
    member = await seed_member(unit_env, tenant, "member@acme.com", Role.ENTRY)

    item = await use_case.execute(
        DeactivateUserRequest(actor_id=str(admin.id), user_id=str(member.id))
    )

    assert not item.is_active


@pytest.mark.asyncio
async def test_cannot_deactivate_self(unit_env):
    use_case = await unit_env.get(DeactivateUserUseCase)
    tenant = await seed_tenant(unit_env)
    admin = await seed_member(unit_env, tenant, "admin@acme.com")

    with pytest.raises(Unauthorized):
        await use_case.execute(
            DeactivateUserRequest(actor_id=str(admin.id), user_id=str(admin.id))
        )


@pytest.mark.asyncio
async def test_deactivated_admin_loses_access(unit_env):
    deactivate = await unit_env.get(DeactivateUserUseCase)
    list_users = await unit_env.get(ListUsersUseCase)
    tenant = await seed_tenant(unit_env)
    first = await seed_member(unit_env, tenant, "first@acme.com")
    second = await seed_member(unit_env, tenant, "second@acme.com")

    await deactivate.execute(
        DeactivateUserRequest(actor_id=str(first.id), user_id=str(second.id))
    )

    with pytest.raises(Unauthorized):
        await list_users.execute(ListUsersRequest(actor_id=str(second.id)))

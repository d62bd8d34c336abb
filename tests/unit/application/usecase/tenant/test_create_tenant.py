"""Unit tests for tenant setup use cases."""

import pytest

from protrack.application.usecase.tenant import (
    CheckSubdomainRequest,
    CheckSubdomainUseCase,
    CreateTenantRequest,
    CreateTenantUseCase,
    GetCurrentTenantRequest,
    GetCurrentTenantUseCase,
)
from protrack.domain.error import (
    AlreadyMember,
    NotFoundError,
    SubdomainInvalidFormat,
    SubdomainTaken,
)
from protrack.domain.value import Role
from tests.conftest import seed_member, seed_tenant
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateTenantUseCase:
    """Tests for CreateTenantUseCase."""

    @pytest.mark.asyncio
    async def test_creator_becomes_master(self, unit_env):
        use_case = await unit_env.get(CreateTenantUseCase)
        current = await unit_env.get(GetCurrentTenantUseCase)
        founder = await seed_member(unit_env, None, "founder@acme.com")

        response = await use_case.execute(
            CreateTenantRequest(
                actor_id=str(founder.id),
                subdomain="Acme-Builders",
                name=" Acme Builders ",
                email="office@acme.com",
                phone="555-0100",
            )
        )

        assert response.tenant.subdomain == "acme-builders"
        assert response.tenant.name == "Acme Builders"
        assert response.tenant.plan == "professional"
        assert response.user.role == Role.MASTER
        assert set(response.user.permissions.values()) == {"write"}
        assert response.user.tenant_id == response.tenant.tenant_id

        tenant = await current.execute(GetCurrentTenantRequest(actor_id=str(founder.id)))
        assert tenant.tenant_id == response.tenant.tenant_id

    @pytest.mark.asyncio
    async def test_taken_subdomain_refused(self, unit_env):
        use_case = await unit_env.get(CreateTenantUseCase)
        await seed_tenant(unit_env, "acme")
        founder = await seed_member(unit_env, None, "founder@other.com")

        with pytest.raises(SubdomainTaken):
            await use_case.execute(
                CreateTenantRequest(
                    actor_id=str(founder.id),
                    subdomain="acme",
                    name="Other Acme",
                    email="office@other.com",
                )
            )

    @pytest.mark.asyncio
    async def test_invalid_subdomain_refused(self, unit_env):
        use_case = await unit_env.get(CreateTenantUseCase)
        founder = await seed_member(unit_env, None, "founder@acme.com")

        with pytest.raises(SubdomainInvalidFormat):
            await use_case.execute(
                CreateTenantRequest(
                    actor_id=str(founder.id),
                    subdomain="-bad_name",
                    name="Acme",
                    email="office@acme.com",
                )
            )

    @pytest.mark.asyncio
    async def test_existing_member_cannot_create_second_tenant(self, unit_env):
        use_case = await unit_env.get(CreateTenantUseCase)
        tenant = await seed_tenant(unit_env, "acme")
        admin = await seed_member(unit_env, tenant, "admin@acme.com")

        with pytest.raises(AlreadyMember):
            await use_case.execute(
                CreateTenantRequest(
                    actor_id=str(admin.id),
                    subdomain="acme-two",
                    name="Acme Two",
                    email="office@acme.com",
                )
            )

    @pytest.mark.asyncio
    async def test_current_tenant_without_membership(self, unit_env):
        current = await unit_env.get(GetCurrentTenantUseCase)
        loner = await seed_member(unit_env, None, "loner@example.com")

        with pytest.raises(NotFoundError):
            await current.execute(GetCurrentTenantRequest(actor_id=str(loner.id)))


class TestCheckSubdomainUseCase:
    """Tests for CheckSubdomainUseCase."""

    @pytest.mark.asyncio
    async def test_available(self, unit_env):
        use_case = await unit_env.get(CheckSubdomainUseCase)

        response = await use_case.execute(CheckSubdomainRequest(subdomain="Fresh"))

        assert response.subdomain == "fresh"
        assert response.valid
        assert response.available

    @pytest.mark.asyncio
    async def test_taken(self, unit_env):
        use_case = await unit_env.get(CheckSubdomainUseCase)
        await seed_tenant(unit_env, "acme")

        response = await use_case.execute(CheckSubdomainRequest(subdomain="acme"))

        assert response.valid
        assert not response.available

    @pytest.mark.asyncio
    async def test_invalid_format(self, unit_env):
        use_case = await unit_env.get(CheckSubdomainUseCase)

        response = await use_case.execute(CheckSubdomainRequest(subdomain="a"))

        assert not response.valid
        assert not response.available

    @pytest.mark.asyncio
    async def test_suggest_from_organization_name(self, unit_env):
        use_case = await unit_env.get(CheckSubdomainUseCase)
        await seed_tenant(unit_env, "acme-builders")

        response = await use_case.suggest("Acme Builders")

        assert response.subdomain == "acme-builders"
        assert response.valid
        assert not response.available

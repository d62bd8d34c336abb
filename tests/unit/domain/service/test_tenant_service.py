"""Unit tests for TenantService."""

import pytest

from protrack.domain.error import SubdomainTaken
from protrack.domain.service import TenantService
from protrack.domain.value import Subdomain, TenantStatus
from tests.conftest import seed_tenant
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


@pytest.mark.asyncio
async def test_create_tenant(unit_env):
    service = await unit_env.get(TenantService)

    tenant = await service.create_tenant(
        Subdomain("acme"), "Acme Builders", "office@acme.com", "", "professional"
    )

    assert tenant.status == TenantStatus.ACTIVE
    assert tenant.phone is None
    assert not await service.is_subdomain_available(Subdomain("ACME"))


@pytest.mark.asyncio
async def test_subdomain_is_unique(unit_env):
    service = await unit_env.get(TenantService)
    await seed_tenant(unit_env, "acme")

    with pytest.raises(SubdomainTaken):
        await service.create_tenant(
            Subdomain("acme"), "Other Acme", "hi@other.com", None, "professional"
        )

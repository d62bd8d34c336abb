"""Integration tests for PostgresInvitationRepository.

Run against a migrated database by exporting DATABASE__URL.
"""

import os
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from protrack.domain.error import MissingTenantContext
from protrack.domain.repository import InvitationRepository
from protrack.domain.value import Email, InvitationStatus, InvitationToken, TenantScope
from tests.conftest import seed_invitation, seed_member, seed_tenant
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.getenv("DATABASE__URL"), reason="DATABASE__URL not set"
)

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


def unique(prefix: str) -> str:
    return f"{prefix}-{os.urandom(4).hex()}"


class TestInvitationRepositoryIntegration:
    """Integration tests for PostgresInvitationRepository."""

    @pytest.mark.asyncio
    async def test_token_lookup_and_transition(self, integration_env):
        repo = await integration_env.get(InvitationRepository)
        tenant = await seed_tenant(integration_env, unique("acme"))
        admin = await seed_member(integration_env, tenant, f"{unique('admin')}@acme.com")
        invitation = await seed_invitation(
            integration_env, tenant, admin, f"{unique('new')}@acme.com"
        )

        found = await repo.find_pending_by_token(invitation.invitation_token)
        assert found.id == invitation.id

        assert await repo.transition_status(
            invitation.id, InvitationStatus.PENDING, InvitationStatus.ACCEPTED
        )
        assert not await repo.transition_status(
            invitation.id, InvitationStatus.PENDING, InvitationStatus.ACCEPTED
        )
        assert await repo.find_pending_by_token(invitation.invitation_token) is None

    @pytest.mark.asyncio
    async def test_renew_only_touches_pending_rows(self, integration_env):
        repo = await integration_env.get(InvitationRepository)
        tenant = await seed_tenant(integration_env, unique("acme"))
        admin = await seed_member(integration_env, tenant, f"{unique('admin')}@acme.com")
        invitation = await seed_invitation(
            integration_env, tenant, admin, f"{unique('new')}@acme.com"
        )
        now = datetime.now(timezone.utc)
        token = InvitationToken(unique("renewed"))

        renewed = await repo.renew(invitation.id, token, now + timedelta(days=7), now)
        assert renewed.invitation_token == token
        assert renewed.status == InvitationStatus.PENDING

        await repo.transition_status(
            invitation.id, InvitationStatus.PENDING, InvitationStatus.EXPIRED
        )
        assert await repo.renew(invitation.id, token, now + timedelta(days=14), now) is None

        stored = await repo.find_by_id(TenantScope(tenant_id=tenant.id), invitation.id)
        assert stored.status == InvitationStatus.EXPIRED
        assert stored.expires_at == renewed.expires_at

    @pytest.mark.asyncio
    async def test_one_pending_invitation_per_email(self, integration_env):
        repo = await integration_env.get(InvitationRepository)
        tenant = await seed_tenant(integration_env, unique("acme"))
        admin = await seed_member(integration_env, tenant, f"{unique('admin')}@acme.com")
        email = f"{unique('dup')}@acme.com"
        await seed_invitation(integration_env, tenant, admin, email)

        with pytest.raises(IntegrityError):
            await seed_invitation(integration_env, tenant, admin, email)

        scope = TenantScope(tenant_id=tenant.id)
        assert await repo.exists_pending_for_email(scope, Email(email))

    @pytest.mark.asyncio
    async def test_scoped_list_requires_scope(self, integration_env):
        repo = await integration_env.get(InvitationRepository)

        with pytest.raises(MissingTenantContext):
            await repo.list_pending(None)

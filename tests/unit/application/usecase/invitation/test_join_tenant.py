"""Unit tests for JoinTenantUseCase."""

import pytest

from protrack.application.usecase.invitation import JoinTenantRequest, JoinTenantUseCase
from protrack.domain.error import AlreadyMember, Unauthorized
from protrack.domain.repository import InvitationRepository
from protrack.domain.value import InvitationStatus, Role, TenantScope
from tests.conftest import seed_invitation, seed_member, seed_tenant
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestJoinTenantUseCase:
    """Tests for JoinTenantUseCase."""

    @pytest.mark.asyncio
    async def test_signed_in_user_joins(self, unit_env):
        use_case = await unit_env.get(JoinTenantUseCase)
        invitations = await unit_env.get(InvitationRepository)
        tenant = await seed_tenant(unit_env)
        admin = await seed_member(unit_env, tenant, "admin@acme.com")
        joiner = await seed_member(unit_env, None, "joiner@example.com")
        invitation = await seed_invitation(
            unit_env, tenant, admin, "joiner@example.com", Role.ENTRY, token="tok-j"
        )

        response = await use_case.execute(
            JoinTenantRequest(actor_id=str(joiner.id), token="tok-j")
        )

        assert response.user.user_id == str(joiner.id)
        assert response.user.tenant_id == str(tenant.id)
        assert response.user.role == Role.ENTRY
        stored = await invitations.find_by_id(
            TenantScope(tenant_id=tenant.id), invitation.id
        )
        assert stored.status == InvitationStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_email_mismatch_refused(self, unit_env):
        use_case = await unit_env.get(JoinTenantUseCase)
        tenant = await seed_tenant(unit_env)
        admin = await seed_member(unit_env, tenant, "admin@acme.com")
        other = await seed_member(unit_env, None, "other@example.com")
        await seed_invitation(unit_env, tenant, admin, "invitee@example.com", token="tok-m")

        with pytest.raises(Unauthorized):
            await use_case.execute(JoinTenantRequest(actor_id=str(other.id), token="tok-m"))

    @pytest.mark.asyncio
    async def test_member_of_same_tenant(self, unit_env):
        use_case = await unit_env.get(JoinTenantUseCase)
        tenant = await seed_tenant(unit_env)
        admin = await seed_member(unit_env, tenant, "admin@acme.com")
        await seed_invitation(unit_env, tenant, admin, "admin@acme.com", token="tok-self")

        with pytest.raises(AlreadyMember):
            await use_case.execute(
                JoinTenantRequest(actor_id=str(admin.id), token="tok-self")
            )

    @pytest.mark.asyncio
    async def test_member_of_other_tenant_refused(self, unit_env):
        use_case = await unit_env.get(JoinTenantUseCase)
        acme = await seed_tenant(unit_env, "acme")
        globex = await seed_tenant(unit_env, "globex")
        admin = await seed_member(unit_env, acme, "admin@acme.com")
        outsider = await seed_member(unit_env, globex, "pat@globex.com")
        await seed_invitation(unit_env, acme, admin, "pat@globex.com", token="tok-o")

        with pytest.raises(Unauthorized):
            await use_case.execute(
                JoinTenantRequest(actor_id=str(outsider.id), token="tok-o")
            )

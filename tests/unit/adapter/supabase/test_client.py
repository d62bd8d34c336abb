"""Unit tests for the Supabase Auth admin client and adapters."""

import json
from uuid import UUID, uuid4

import httpx
import pytest

from protrack.adapter.error import IdentityExistsError, ProviderError
from protrack.adapter.supabase import (
    SupabaseAdminClient,
    SupabaseIdentityProvider,
    SupabaseInvitationMailer,
)
from protrack.domain.value import Email, UserId


def gotrue_user(email: str, user_id: str | None = None, name: str | None = None) -> dict:
    return {
        "id": user_id or str(uuid4()),
        "email": email,
        "email_confirmed_at": "2026-01-01T00:00:00Z",
        "user_metadata": {"name": name} if name else {},
    }


def make_client(handler) -> SupabaseAdminClient:
    return SupabaseAdminClient(
        supabase_url="https://project.supabase.co/",
        service_role_key="service-key",
        transport=httpx.MockTransport(handler),
    )


class TestSupabaseAdminClient:
    """Tests for SupabaseAdminClient."""

    @pytest.mark.asyncio
    async def test_admin_calls_carry_service_key(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"users": []})

        await make_client(handler).list_users(page=1, per_page=50)

        [request] = seen
        assert request.url.path == "/auth/v1/admin/users"
        assert request.url.params["per_page"] == "50"
        assert request.headers["apikey"] == "service-key"
        assert request.headers["authorization"] == "Bearer service-key"

    @pytest.mark.asyncio
    async def test_get_user_uses_caller_token(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["authorization"] == "Bearer user-token"
            return httpx.Response(200, json=gotrue_user("pat@acme.com"))

        user = await make_client(handler).get_user("user-token")

        assert user["email"] == "pat@acme.com"

    @pytest.mark.asyncio
    async def test_get_user_rejected_token(self):
        client = make_client(lambda request: httpx.Response(401, json={"msg": "bad jwt"}))

        assert await client.get_user("expired") is None

    @pytest.mark.asyncio
    async def test_find_by_email_scans_pages(self):
        pages = {
            "1": [gotrue_user(f"user{i}@acme.com") for i in range(2)],
            "2": [gotrue_user("Target@Acme.com")],
        }

        def handler(request: httpx.Request) -> httpx.Response:
            users = pages.get(request.url.params["page"], [])
            return httpx.Response(200, json={"users": users})

        user = await make_client(handler).find_user_by_email("target@acme.com", per_page=2)

        assert user["email"] == "Target@Acme.com"

    @pytest.mark.asyncio
    async def test_find_by_email_stops_on_short_page(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.params["page"])
            return httpx.Response(200, json={"users": [gotrue_user("a@acme.com")]})

        user = await make_client(handler).find_user_by_email("b@acme.com", per_page=2)

        assert user is None
        assert calls == ["1"]

    @pytest.mark.asyncio
    async def test_create_user_duplicate_email(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                422,
                json={
                    "error_code": "email_exists",
                    "msg": "A user with this email address has already been registered",
                },
            )

        with pytest.raises(IdentityExistsError):
            await make_client(handler).create_user("pat@acme.com", "secret1", {})

    @pytest.mark.asyncio
    async def test_server_error_becomes_provider_error(self):
        client = make_client(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(ProviderError):
            await client.delete_user(str(uuid4()))

    @pytest.mark.asyncio
    async def test_transport_error_becomes_provider_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ProviderError):
            await make_client(handler).list_users(page=1, per_page=10)


class TestSupabaseIdentityProvider:
    """Tests for SupabaseIdentityProvider."""

    @pytest.mark.asyncio
    async def test_create_identity_confirms_email(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            bodies.append(body)
            return httpx.Response(200, json=gotrue_user(body["email"], name="Nia"))

        provider = SupabaseIdentityProvider(make_client(handler))
        identity = await provider.create_identity(Email("nia@acme.com"), "secret1", "Nia")

        assert bodies[0]["email_confirm"] is True
        assert bodies[0]["user_metadata"] == {"name": "Nia"}
        assert identity.email.root == "nia@acme.com"
        assert identity.email_confirmed
        assert identity.display_name == "Nia"

    @pytest.mark.asyncio
    async def test_update_credentials(self):
        user_id = str(uuid4())

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "PUT"
            assert request.url.path == f"/auth/v1/admin/users/{user_id}"
            body = json.loads(request.content)
            assert body["password"] == "newpass"
            return httpx.Response(200, json=gotrue_user("kim@acme.com", user_id, "Kim"))

        provider = SupabaseIdentityProvider(make_client(handler))
        identity = await provider.update_credentials(
            UserId(UUID(user_id)), "newpass", "Kim"
        )

        assert str(identity.id) == user_id


class TestSupabaseInvitationMailer:
    """Tests for SupabaseInvitationMailer."""

    @pytest.mark.asyncio
    async def test_account_invitation_uses_invite_endpoint(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        mailer = SupabaseInvitationMailer(make_client(handler))
        await mailer.send_account_invitation(
            Email("new@acme.com"),
            "http://localhost:3000/accept-invitation?token=abc",
            {"invitation_token": "abc"},
        )

        [request] = seen
        assert request.url.path == "/auth/v1/invite"
        assert request.url.params["redirect_to"].endswith("token=abc")
        assert json.loads(request.content)["data"] == {"invitation_token": "abc"}

    @pytest.mark.asyncio
    async def test_join_invitation_sends_magic_link(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        mailer = SupabaseInvitationMailer(make_client(handler))
        await mailer.send_join_invitation(
            Email("known@acme.com"), "http://localhost:3000/join-tenant?token=abc", {}
        )

        body = json.loads(seen[0].content)
        assert seen[0].url.path == "/auth/v1/otp"
        assert body["create_user"] is False

"""Unit tests for the HTTP API with mocked infrastructure."""

import pytest
from fastapi.testclient import TestClient

from protrack.adapter.supabase import MockIdentityProvider, MockInvitationMailer
from protrack.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def container():
    return build_test_container()


@pytest.fixture
def client(container):
    with TestClient(create_app(container=container)) as test_client:
        yield test_client


@pytest.fixture
def identities(client, container) -> MockIdentityProvider:
    return client.portal.call(container.get, MockIdentityProvider)


@pytest.fixture
def mailer(client, container) -> MockInvitationMailer:
    return client.portal.call(container.get, MockInvitationMailer)


def bearer(identities: MockIdentityProvider, email: str, name: str = "Pat") -> dict:
    identity = identities.register(email, display_name=name)
    return {"Authorization": f"Bearer {identities.issue_token(identity)}"}


def create_tenant(client, headers, subdomain: str = "acme") -> dict:
    response = client.post(
        "/tenants",
        json={"subdomain": subdomain, "name": "Acme Builders", "email": "office@acme.com"},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200


def test_missing_token_is_401(client):
    response = client.get("/users")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_rejected_token_is_401(client):
    response = client.get("/tenants/current", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401


def test_tenant_setup_and_duplicate_subdomain(client, identities):
    founder = bearer(identities, "founder@acme.com")
    body = create_tenant(client, founder)

    assert body["user"]["role"] == "master"
    assert client.get("/tenants/subdomains/acme").json()["available"] is False
    suggestion = client.get("/tenants/subdomain-suggestion", params={"name": "Acme Co"})
    assert suggestion.json()["subdomain"] == "acme-co"

    rival = bearer(identities, "rival@other.com")
    response = client.post(
        "/tenants",
        json={"subdomain": "acme", "name": "Other", "email": "office@other.com"},
        headers=rival,
    )
    assert response.status_code == 409


def test_invalid_subdomain_is_422(client, identities):
    founder = bearer(identities, "founder@acme.com")

    response = client.post(
        "/tenants",
        json={"subdomain": "x", "name": "Acme", "email": "office@acme.com"},
        headers=founder,
    )

    assert response.status_code == 422


def test_invitation_round_trip(client, identities, mailer):
    admin = bearer(identities, "admin@acme.com")
    create_tenant(client, admin)

    issued = client.post(
        "/invitations", json={"email": "new@acme.com", "role": "entry"}, headers=admin
    )
    assert issued.status_code == 201, issued.text
    assert issued.json()["delivered"] is True
    assert "invitation_token" not in issued.json()["invitation"]

    token = mailer.sent[0].metadata["invitation_token"]
    lookup = client.get("/invitations/lookup", params={"token": token})
    assert lookup.status_code == 200
    assert lookup.json()["tenant_name"] == "Acme Builders"

    accepted = client.post(
        "/invitations/accept",
        json={"token": token, "password": "secret1", "name": "Nia"},
    )
    assert accepted.status_code == 200, accepted.text
    assert accepted.json()["user"]["role"] == "entry"

    again = client.post(
        "/invitations/accept",
        json={"token": token, "password": "secret1", "name": "Nia"},
    )
    assert again.status_code == 404

    users = client.get("/users", headers=admin).json()["users"]
    assert sorted(u["email"] for u in users) == ["admin@acme.com", "new@acme.com"]


def test_duplicate_invitation_is_409(client, identities):
    admin = bearer(identities, "admin@acme.com")
    create_tenant(client, admin)
    payload = {"email": "new@acme.com", "role": "view"}

    assert client.post("/invitations", json=payload, headers=admin).status_code == 201
    assert client.post("/invitations", json=payload, headers=admin).status_code == 409


def test_member_without_users_permission_is_403(client, identities, mailer):
    admin = bearer(identities, "admin@acme.com")
    create_tenant(client, admin)
    client.post(
        "/invitations", json={"email": "entry@acme.com", "role": "entry"}, headers=admin
    )
    token = mailer.sent[0].metadata["invitation_token"]
    accepted = client.post(
        "/invitations/accept",
        json={"token": token, "password": "secret1", "name": "Ed"},
    ).json()
    entry_identity = next(
        i for i in identities.identities.values() if i.email.root == "entry@acme.com"
    )
    entry = {"Authorization": f"Bearer {identities.issue_token(entry_identity)}"}

    response = client.post(
        "/invitations", json={"email": "x@acme.com", "role": "view"}, headers=entry
    )

    assert accepted["user"]["permissions"]["users"] == "none"
    assert response.status_code == 403


def test_resolve_session_for_new_user(client, identities):
    headers = bearer(identities, "new@example.com")

    response = client.get("/session/resolve", params={"path": "/dashboard"}, headers=headers)

    assert response.status_code == 200
    assert response.json()["outcome"] == "redirect_to_tenant_setup"
    assert response.json()["target"] == "/tenant-setup"


def test_resolve_session_anonymous(client):
    response = client.get("/session/resolve", params={"path": "/dashboard"})

    assert response.json()["outcome"] == "redirect_to_auth"


def test_unknown_invitation_token_is_404(client):
    response = client.get("/invitations/lookup", params={"token": "missing"})

    assert response.status_code == 404


def test_self_deactivation_is_403(client, identities):
    admin = bearer(identities, "admin@acme.com")
    body = create_tenant(client, admin)

    response = client.post(f"/users/{body['user']['user_id']}/deactivate", headers=admin)

    assert response.status_code == 403

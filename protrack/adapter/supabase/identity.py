"""Identity provider backed by Supabase Auth."""

import asyncio
from typing import Any
from uuid import UUID, uuid4

from protrack.adapter.error import IdentityExistsError, ProviderError
from protrack.domain.service.identity_service import IdentityProvider
from protrack.domain.value import Email, Identity, UserId

from .client import SupabaseAdminClient


def user_to_identity(user: dict[str, Any]) -> Identity:
    """Convert a GoTrue user object to an Identity."""
    metadata = user.get("user_metadata") or {}
    return Identity(
        id=UserId(UUID(user["id"])),
        email=Email(user["email"]),
        email_confirmed=bool(user.get("email_confirmed_at")),
        display_name=metadata.get("name"),
    )


class SupabaseIdentityProvider(IdentityProvider):
    """IdentityProvider over the Supabase Auth admin API."""

    def __init__(self, client: SupabaseAdminClient, list_page_size: int = 200) -> None:
        """Initialize identity provider.

        Args:
            client: Admin REST client
            list_page_size: Page size when scanning users by email
        """
        self.client = client
        self.list_page_size = list_page_size

    async def verify_access_token(self, access_token: str) -> Identity | None:
        user = await self.client.get_user(access_token)
        return user_to_identity(user) if user else None

    async def find_by_email(self, email: Email) -> Identity | None:
        user = await self.client.find_user_by_email(email.root, self.list_page_size)
        return user_to_identity(user) if user else None

    async def create_identity(
        self, email: Email, password: str, display_name: str
    ) -> Identity:
        user = await self.client.create_user(email.root, password, {"name": display_name})
        return user_to_identity(user)

    async def update_credentials(
        self, identity_id: UserId, password: str, display_name: str
    ) -> Identity:
        user = await self.client.update_user(
            str(identity_id),
            {
                "password": password,
                "email_confirm": True,
                "user_metadata": {"name": display_name},
            },
        )
        return user_to_identity(user)

    async def delete_identity(self, identity_id: UserId) -> None:
        await self.client.delete_user(str(identity_id))


class MockIdentityProvider(IdentityProvider):
    """In-memory identity provider for testing.

    Access tokens are registered explicitly with ``issue_token``. Every call
    yields to the event loop once so concurrent callers interleave the way
    network round trips would.
    """

    def __init__(self) -> None:
        self.identities: dict[UserId, Identity] = {}
        self.passwords: dict[UserId, str] = {}
        self.tokens: dict[str, UserId] = {}
        self.deleted: list[UserId] = []
        self.fail_with: ProviderError | None = None

    def register(
        self,
        email: str,
        password: str = "secret123",
        display_name: str | None = None,
        confirmed: bool = True,
    ) -> Identity:
        """Add an identity directly, bypassing the API surface."""
        identity = Identity(
            id=UserId(uuid4()),
            email=Email(email),
            email_confirmed=confirmed,
            display_name=display_name,
        )
        self.identities[identity.id] = identity
        self.passwords[identity.id] = password
        return identity

    def issue_token(self, identity: Identity, token: str | None = None) -> str:
        """Register an access token for an identity."""
        token = token or f"token-{identity.id}"
        self.tokens[token] = identity.id
        return token

    async def _round_trip(self) -> None:
        await asyncio.sleep(0)
        if self.fail_with is not None:
            raise self.fail_with

    def _by_email(self, email: Email) -> Identity | None:
        for identity in self.identities.values():
            if identity.email == email:
                return identity
        return None

    async def verify_access_token(self, access_token: str) -> Identity | None:
        await self._round_trip()
        identity_id = self.tokens.get(access_token)
        return self.identities.get(identity_id) if identity_id else None

    async def find_by_email(self, email: Email) -> Identity | None:
        await self._round_trip()
        return self._by_email(email)

    async def create_identity(
        self, email: Email, password: str, display_name: str
    ) -> Identity:
        await self._round_trip()
        if self._by_email(email):
            raise IdentityExistsError(f"Identity already exists for {email.root}")
        identity = Identity(
            id=UserId(uuid4()),
            email=email,
            email_confirmed=True,
            display_name=display_name,
        )
        self.identities[identity.id] = identity
        self.passwords[identity.id] = password
        return identity

    async def update_credentials(
        self, identity_id: UserId, password: str, display_name: str
    ) -> Identity:
        await self._round_trip()
        current = self.identities.get(identity_id)
        if current is None:
            raise ProviderError(f"Identity {identity_id} not found")
        updated = current.model_copy(
            update={"email_confirmed": True, "display_name": display_name}
        )
        self.identities[identity_id] = updated
        self.passwords[identity_id] = password
        return updated

    async def delete_identity(self, identity_id: UserId) -> None:
        await self._round_trip()
        self.identities.pop(identity_id, None)
        self.passwords.pop(identity_id, None)
        self.deleted.append(identity_id)

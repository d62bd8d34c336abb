"""Supabase Auth (GoTrue) admin REST client.

All admin calls authenticate with the service role key. The key must never
reach a browser.
"""

from typing import Any

import httpx
import logfire

from protrack.adapter.error import IdentityExistsError, ProviderError


class SupabaseAdminClient:
    """Thin async client over the GoTrue REST endpoints used by ProTrack."""

    def __init__(
        self,
        supabase_url: str,
        service_role_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize admin client.

        Args:
            supabase_url: Project URL, e.g. https://<ref>.supabase.co
            service_role_key: Service role key
            timeout: Timeout for one round trip in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.auth_url = supabase_url.rstrip("/") + "/auth/v1"
        self.service_role_key = service_role_key
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.auth_url,
            headers={
                "apikey": self.service_role_key,
                "Authorization": f"Bearer {self.service_role_key}",
            },
            timeout=self.timeout,
            transport=self.transport,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            async with self._client() as client:
                return await client.request(
                    method, path, params=params, json=json, headers=headers
                )
        except httpx.HTTPError as e:
            logfire.error("Supabase Auth HTTP error", method=method, path=path, error=str(e))
            raise ProviderError(f"HTTP error calling {path}: {e}")

    @staticmethod
    def _fail(response: httpx.Response, action: str) -> ProviderError:
        logfire.error(
            "Supabase Auth request failed",
            action=action,
            status_code=response.status_code,
            error=response.text,
        )
        return ProviderError(f"{action} failed: {response.status_code}")

    async def get_user(self, access_token: str) -> dict[str, Any] | None:
        """Resolve a user access token.

        Returns:
            The user object, or None if the token is rejected
        """
        response = await self._request(
            "GET", "/user", headers={"Authorization": f"Bearer {access_token}"}
        )
        if response.status_code in (401, 403):
            return None
        if response.status_code != 200:
            raise self._fail(response, "Token verification")
        return response.json()

    async def list_users(self, page: int, per_page: int) -> list[dict[str, Any]]:
        """List one page of users."""
        response = await self._request(
            "GET", "/admin/users", params={"page": page, "per_page": per_page}
        )
        if response.status_code != 200:
            raise self._fail(response, "User listing")
        return response.json().get("users", [])

    async def find_user_by_email(
        self, email: str, per_page: int = 200
    ) -> dict[str, Any] | None:
        """Scan the user list for an email.

        The admin API has no lookup by email, so pages are read until the
        email is found or a short page marks the end.
        """
        page = 1
        while True:
            users = await self.list_users(page, per_page)
            for user in users:
                if (user.get("email") or "").lower() == email:
                    return user
            if len(users) < per_page:
                return None
            page += 1

    async def create_user(
        self, email: str, password: str, metadata: dict[str, Any]
    ) -> dict[str, Any]:
        """Create a user with a confirmed email.

        Raises:
            IdentityExistsError: If the email is already registered
        """
        response = await self._request(
            "POST",
            "/admin/users",
            json={
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": metadata,
            },
        )
        if response.status_code == 422 and _is_duplicate_email(response):
            raise IdentityExistsError(f"Identity already exists for {email}")
        if response.status_code not in (200, 201):
            raise self._fail(response, "User creation")
        return response.json()

    async def update_user(
        self, user_id: str, attributes: dict[str, Any]
    ) -> dict[str, Any]:
        """Update a user's attributes."""
        response = await self._request("PUT", f"/admin/users/{user_id}", json=attributes)
        if response.status_code != 200:
            raise self._fail(response, "User update")
        return response.json()

    async def delete_user(self, user_id: str) -> None:
        """Delete a user."""
        response = await self._request("DELETE", f"/admin/users/{user_id}")
        if response.status_code not in (200, 204):
            raise self._fail(response, "User deletion")

    async def invite_user(
        self, email: str, redirect_to: str, data: dict[str, Any]
    ) -> None:
        """Send the provider's invite email to a new address."""
        response = await self._request(
            "POST",
            "/invite",
            params={"redirect_to": redirect_to},
            json={"email": email, "data": data},
        )
        if response.status_code != 200:
            raise self._fail(response, "Invite email")

    async def send_magic_link(
        self, email: str, redirect_to: str, data: dict[str, Any]
    ) -> None:
        """Send a sign-in link to an existing identity."""
        response = await self._request(
            "POST",
            "/otp",
            params={"redirect_to": redirect_to},
            json={"email": email, "create_user": False, "data": data},
        )
        if response.status_code != 200:
            raise self._fail(response, "Magic link email")


def _is_duplicate_email(response: httpx.Response) -> bool:
    try:
        body = response.json()
    except ValueError:
        return False
    code = body.get("error_code") or body.get("code")
    message = str(body.get("msg") or body.get("message") or "")
    return code == "email_exists" or "already been registered" in message

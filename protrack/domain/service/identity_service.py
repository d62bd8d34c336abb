"""Identity domain service."""

import logfire

from protrack.domain.value import Email, Identity, UserId

from .base import Service


class IdentityProvider:
    """Identity provider interface.

    Implementations raise the adapter layer's ProviderError when the provider
    cannot be reached or rejects a request, and IdentityExistsError when an
    identity is created for an email that is already registered.
    """

    async def verify_access_token(self, access_token: str) -> Identity | None:
        """Resolve an access token to its identity.

        Args:
            access_token: Bearer token issued by the provider

        Returns:
            The identity, or None if the provider rejects the token
        """
        raise NotImplementedError

    async def find_by_email(self, email: Email) -> Identity | None:
        """Find an identity by email, regardless of tenant.

        Args:
            email: Email to look up

        Returns:
            The identity if registered, None otherwise
        """
        raise NotImplementedError

    async def create_identity(
        self, email: Email, password: str, display_name: str
    ) -> Identity:
        """Create a pre-confirmed identity.

        Args:
            email: Email of the new identity
            password: Initial password
            display_name: Name stored in the identity's metadata

        Returns:
            The created identity
        """
        raise NotImplementedError

    async def update_credentials(
        self, identity_id: UserId, password: str, display_name: str
    ) -> Identity:
        """Set a new password on an identity and mark it confirmed.

        Args:
            identity_id: Identity to update
            password: New password
            display_name: Name stored in the identity's metadata

        Returns:
            The updated identity
        """
        raise NotImplementedError

    async def delete_identity(self, identity_id: UserId) -> None:
        """Delete an identity.

        Args:
            identity_id: Identity to delete
        """
        raise NotImplementedError


class IdentityService(Service):
    """Domain service wrapping the identity provider."""

    def __init__(self, identity_provider: IdentityProvider) -> None:
        """Initialize identity service.

        Args:
            identity_provider: Identity provider implementation
        """
        self.identity_provider = identity_provider

    async def authenticate(self, access_token: str) -> Identity | None:
        """Resolve a bearer token to an identity.

        Args:
            access_token: Bearer token

        Returns:
            Identity, or None if the token was rejected
        """
        with logfire.span("identity_service.authenticate"):
            identity = await self.identity_provider.verify_access_token(access_token)
            if identity is None:
                logfire.info("Access token rejected")
            return identity

    async def find_by_email(self, email: Email) -> Identity | None:
        """Find an identity by email."""
        with logfire.span("identity_service.find_by_email", email=email.root):
            identity = await self.identity_provider.find_by_email(email)
            logfire.info(
                "Identity lookup by email",
                email=email.root,
                exists=identity is not None,
            )
            return identity

    async def email_has_identity(self, email: Email) -> bool:
        """Whether the email is registered with the provider at all.

        Used to choose a delivery channel, never as a correctness gate.
        """
        return await self.find_by_email(email) is not None

    async def create_identity(
        self, email: Email, password: str, display_name: str
    ) -> Identity:
        """Create a pre-confirmed identity."""
        with logfire.span("identity_service.create_identity", email=email.root):
            identity = await self.identity_provider.create_identity(
                email, password, display_name
            )
            logfire.info(
                "Identity created", identity_id=str(identity.id), email=email.root
            )
            return identity

    async def update_credentials(
        self, identity_id: UserId, password: str, display_name: str
    ) -> Identity:
        """Reset the password of an existing identity and confirm it."""
        with logfire.span(
            "identity_service.update_credentials", identity_id=str(identity_id)
        ):
            identity = await self.identity_provider.update_credentials(
                identity_id, password, display_name
            )
            logfire.info("Identity credentials updated", identity_id=str(identity_id))
            return identity

    async def delete_identity(self, identity_id: UserId) -> None:
        """Delete an identity."""
        with logfire.span("identity_service.delete_identity", identity_id=str(identity_id)):
            await self.identity_provider.delete_identity(identity_id)
            logfire.info("Identity deleted", identity_id=str(identity_id))

"""Identity infrastructure providers."""

from dishka import Scope, provide

from protrack.adapter.supabase import (
    SupabaseAdminClient,
    SupabaseIdentityProvider,
    SupabaseInvitationMailer,
)
from protrack.config import ConfigurationError, Settings
from protrack.domain.service import IdentityProvider, InvitationMailer
from protrack.util.di.base import ProviderBase

PLACEHOLDER_KEY = "CHANGE_ME_IN_PRODUCTION"


class IdentityComponentProvider(ProviderBase):
    """Identity component base (identity provider and invitation mailer)."""

    __mock_component__ = "identity"


class ProdIdentityComponentProvider(IdentityComponentProvider):
    """Production identity provider backed by Supabase Auth."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_admin_client(self, settings: Settings) -> SupabaseAdminClient:
        """Provide Supabase Auth admin client.

        Raises:
            ConfigurationError: If the service role key is not configured
                outside development and test
        """
        identity = settings.identity
        if (
            identity.service_role_key == PLACEHOLDER_KEY
            and settings.environment not in ("test", "development")
        ):
            raise ConfigurationError("IDENTITY__SERVICE_ROLE_KEY must be configured")

        return SupabaseAdminClient(
            supabase_url=identity.supabase_url,
            service_role_key=identity.service_role_key,
            timeout=identity.request_timeout,
        )

    @provide(scope=Scope.APP)
    def get_identity_provider(
        self, client: SupabaseAdminClient, settings: Settings
    ) -> IdentityProvider:
        """Provide identity provider."""
        return SupabaseIdentityProvider(
            client=client, list_page_size=settings.identity.list_page_size
        )

    @provide(scope=Scope.APP)
    def get_invitation_mailer(self, client: SupabaseAdminClient) -> InvitationMailer:
        """Provide invitation mailer."""
        return SupabaseInvitationMailer(client=client)

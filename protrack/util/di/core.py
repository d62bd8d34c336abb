"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from protrack.config import GuardSettings, InvitationSettings, Settings
from protrack.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        """Provide invitation settings."""
        return settings.invitations

    @provide(scope=Scope.APP)
    def provide_guard_settings(self, settings: Settings) -> GuardSettings:
        """Provide guard settings."""
        return settings.guard

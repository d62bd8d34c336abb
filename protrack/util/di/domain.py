"""Domain layer DI providers."""

from dishka import Scope, provide

from protrack.config import GuardSettings, InvitationSettings, Settings
from protrack.domain.repository import (
    InvitationRepository,
    TenantRepository,
    UserRepository,
)
from protrack.domain.service import (
    AccessService,
    IdentityProvider,
    IdentityService,
    InvitationDeliveryService,
    InvitationMailer,
    InvitationService,
    TenantResolverGuard,
    TenantService,
    UserService,
)
from protrack.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_tenant_service(self, tenant_repository: TenantRepository) -> TenantService:
        """Provide tenant domain service."""
        return TenantService(tenant_repository=tenant_repository)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        invitation_settings: InvitationSettings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            expiry_days=invitation_settings.expiry_days,
            rotate_token_on_resend=invitation_settings.rotate_token_on_resend,
        )

    @provide
    def get_identity_service(
        self, identity_provider: IdentityProvider
    ) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(identity_provider=identity_provider)

    @provide
    def get_delivery_service(
        self, mailer: InvitationMailer, settings: Settings
    ) -> InvitationDeliveryService:
        """Provide invitation delivery service."""
        return InvitationDeliveryService(
            mailer=mailer,
            invitation_settings=settings.invitations,
            frontend_url=settings.frontend_url,
        )

    @provide(scope=Scope.APP)
    def get_access_service(self) -> AccessService:
        """Provide access control service (stateless)."""
        return AccessService()

    @provide(scope=Scope.APP)
    def get_tenant_guard(self, guard_settings: GuardSettings) -> TenantResolverGuard:
        """Provide tenant resolver guard (stateless)."""
        return TenantResolverGuard(settings=guard_settings)

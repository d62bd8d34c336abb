"""Application layer DI providers."""

from dishka import Scope, provide

from protrack.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CancelInvitationUseCase,
    GetInvitationUseCase,
    IssueInvitationUseCase,
    JoinTenantUseCase,
    ListInvitationsUseCase,
    ResendInvitationUseCase,
)
from protrack.application.usecase.session import (
    AuthenticateUseCase,
    ResolveSessionUseCase,
)
from protrack.application.usecase.tenant import (
    CheckSubdomainUseCase,
    CreateTenantUseCase,
    GetCurrentTenantUseCase,
)
from protrack.application.usecase.user import (
    DeactivateUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)
from protrack.domain.service import (
    AccessService,
    IdentityService,
    InvitationDeliveryService,
    InvitationService,
    TenantResolverGuard,
    TenantService,
    UserService,
)
from protrack.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Invitation use cases
    @provide(scope=Scope.REQUEST)
    def get_issue_invitation_use_case(
        self,
        user_service: UserService,
        access_service: AccessService,
        identity_service: IdentityService,
        invitation_service: InvitationService,
        delivery_service: InvitationDeliveryService,
        tenant_service: TenantService,
    ) -> IssueInvitationUseCase:
        """Provide issue invitation use case."""
        return IssueInvitationUseCase(
            user_service=user_service,
            access_service=access_service,
            identity_service=identity_service,
            invitation_service=invitation_service,
            delivery_service=delivery_service,
            tenant_service=tenant_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_resend_invitation_use_case(
        self,
        user_service: UserService,
        access_service: AccessService,
        identity_service: IdentityService,
        invitation_service: InvitationService,
        delivery_service: InvitationDeliveryService,
        tenant_service: TenantService,
    ) -> ResendInvitationUseCase:
        """Provide resend invitation use case."""
        return ResendInvitationUseCase(
            user_service=user_service,
            access_service=access_service,
            identity_service=identity_service,
            invitation_service=invitation_service,
            delivery_service=delivery_service,
            tenant_service=tenant_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_cancel_invitation_use_case(
        self,
        user_service: UserService,
        access_service: AccessService,
        invitation_service: InvitationService,
    ) -> CancelInvitationUseCase:
        """Provide cancel invitation use case."""
        return CancelInvitationUseCase(
            user_service=user_service,
            access_service=access_service,
            invitation_service=invitation_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_invitations_use_case(
        self,
        user_service: UserService,
        access_service: AccessService,
        invitation_service: InvitationService,
    ) -> ListInvitationsUseCase:
        """Provide list invitations use case."""
        return ListInvitationsUseCase(
            user_service=user_service,
            access_service=access_service,
            invitation_service=invitation_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_invitation_use_case(
        self,
        invitation_service: InvitationService,
        tenant_service: TenantService,
        user_service: UserService,
    ) -> GetInvitationUseCase:
        """Provide get invitation use case."""
        return GetInvitationUseCase(
            invitation_service=invitation_service,
            tenant_service=tenant_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_accept_invitation_use_case(
        self,
        invitation_service: InvitationService,
        identity_service: IdentityService,
        user_service: UserService,
    ) -> AcceptInvitationUseCase:
        """Provide accept invitation use case."""
        return AcceptInvitationUseCase(
            invitation_service=invitation_service,
            identity_service=identity_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_join_tenant_use_case(
        self, invitation_service: InvitationService, user_service: UserService
    ) -> JoinTenantUseCase:
        """Provide join tenant use case."""
        return JoinTenantUseCase(
            invitation_service=invitation_service, user_service=user_service
        )

    # Tenant use cases
    @provide(scope=Scope.REQUEST)
    def get_create_tenant_use_case(
        self, tenant_service: TenantService, user_service: UserService
    ) -> CreateTenantUseCase:
        """Provide create tenant use case."""
        return CreateTenantUseCase(
            tenant_service=tenant_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_check_subdomain_use_case(
        self, tenant_service: TenantService
    ) -> CheckSubdomainUseCase:
        """Provide check subdomain use case."""
        return CheckSubdomainUseCase(tenant_service=tenant_service)

    @provide(scope=Scope.REQUEST)
    def get_current_tenant_use_case(
        self, tenant_service: TenantService, user_service: UserService
    ) -> GetCurrentTenantUseCase:
        """Provide get current tenant use case."""
        return GetCurrentTenantUseCase(
            tenant_service=tenant_service, user_service=user_service
        )

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_list_users_use_case(
        self, user_service: UserService, access_service: AccessService
    ) -> ListUsersUseCase:
        """Provide list users use case."""
        return ListUsersUseCase(user_service=user_service, access_service=access_service)

    @provide(scope=Scope.REQUEST)
    def get_update_user_use_case(
        self, user_service: UserService, access_service: AccessService
    ) -> UpdateUserUseCase:
        """Provide update user use case."""
        return UpdateUserUseCase(
            user_service=user_service, access_service=access_service
        )

    @provide(scope=Scope.REQUEST)
    def get_deactivate_user_use_case(
        self, user_service: UserService, access_service: AccessService
    ) -> DeactivateUserUseCase:
        """Provide deactivate user use case."""
        return DeactivateUserUseCase(
            user_service=user_service, access_service=access_service
        )

    # Session use cases
    @provide(scope=Scope.REQUEST)
    def get_authenticate_use_case(
        self, identity_service: IdentityService, user_service: UserService
    ) -> AuthenticateUseCase:
        """Provide authenticate use case."""
        return AuthenticateUseCase(
            identity_service=identity_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_resolve_session_use_case(
        self,
        identity_service: IdentityService,
        user_service: UserService,
        tenant_service: TenantService,
        guard: TenantResolverGuard,
    ) -> ResolveSessionUseCase:
        """Provide resolve session use case."""
        return ResolveSessionUseCase(
            identity_service=identity_service,
            user_service=user_service,
            tenant_service=tenant_service,
            guard=guard,
        )

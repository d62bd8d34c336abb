"""Create tenant use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from protrack.application.usecase.base import BaseUseCase
from protrack.application.usecase.views import TenantItem, UserItem
from protrack.domain.error import AlreadyMember, SubdomainInvalidFormat
from protrack.domain.service import TenantService, UserService
from protrack.domain.value import PermissionSet, Role, Subdomain, UserId


class CreateTenantRequest(BaseModel):
    """Create tenant request."""

    actor_id: str  # From authenticated user
    subdomain: str
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    plan: str = "professional"


class CreateTenantResponse(BaseModel):
    """Create tenant response: the tenant and its first master user."""

    tenant: TenantItem
    user: UserItem


class CreateTenantUseCase(BaseUseCase):
    """Use case for setting up an organization.

    The caller becomes the tenant's master user with write access to every
    resource.
    """

    def __init__(self, tenant_service: TenantService, user_service: UserService) -> None:
        """Initialize create tenant use case.

        Args:
            tenant_service: Tenant domain service
            user_service: User domain service
        """
        self.tenant_service = tenant_service
        self.user_service = user_service

    async def execute(self, request: CreateTenantRequest) -> CreateTenantResponse:
        """Execute tenant setup flow.

        Raises:
            SubdomainInvalidFormat: If the subdomain fails the format rules
            AlreadyMember: If the caller already belongs to a tenant
            SubdomainTaken: If the subdomain is already reserved
        """
        with logfire.span(
            "create_tenant.execute",
            actor_id=request.actor_id,
            subdomain=request.subdomain,
        ):
            if not Subdomain.is_valid(request.subdomain):
                raise SubdomainInvalidFormat(request.subdomain)
            subdomain = Subdomain(request.subdomain)

            actor = await self.user_service.get_by_id(UserId(UUID(request.actor_id)))
            if actor.tenant_id is not None:
                raise AlreadyMember(actor.email.root)

            tenant = await self.tenant_service.create_tenant(
                subdomain=subdomain,
                name=request.name.strip(),
                email=request.email.strip(),
                phone=request.phone,
                plan=request.plan,
            )

            user = await self.user_service.bind_to_tenant(
                actor.id,
                tenant.id,
                actor.name,
                actor.email,
                Role.MASTER,
                PermissionSet.for_role(Role.MASTER),
            )
            logfire.info(
                "Tenant set up", tenant_id=str(tenant.id), master_id=str(user.id)
            )
            return CreateTenantResponse(
                tenant=TenantItem.from_domain(tenant), user=UserItem.from_domain(user)
            )

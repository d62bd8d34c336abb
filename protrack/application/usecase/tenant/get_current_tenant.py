"""Get current tenant use case."""

from uuid import UUID

from pydantic import BaseModel

from protrack.application.usecase.views import TenantItem
from protrack.domain.error import NotFoundError
from protrack.domain.service import TenantService, UserService
from protrack.domain.value import UserId


class GetCurrentTenantRequest(BaseModel):
    """Get current tenant request."""

    actor_id: str  # From authenticated user


class GetCurrentTenantUseCase:
    """Use case for loading the tenant the caller belongs to."""

    def __init__(self, tenant_service: TenantService, user_service: UserService) -> None:
        self.tenant_service = tenant_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentTenantRequest) -> TenantItem:
        """Load the caller's tenant.

        Raises:
            NotFoundError: If the caller has no tenant yet
        """
        actor = await self.user_service.get_by_id(UserId(UUID(request.actor_id)))
        if actor.tenant_id is None:
            raise NotFoundError("Tenant", "current")
        tenant = await self.tenant_service.get_by_id(actor.tenant_id)
        return TenantItem.from_domain(tenant)

"""Check subdomain use case."""

from pydantic import BaseModel

from protrack.domain.service import TenantService
from protrack.domain.value import Subdomain


class CheckSubdomainRequest(BaseModel):
    """Check subdomain request."""

    subdomain: str


class CheckSubdomainResponse(BaseModel):
    """Check subdomain response."""

    subdomain: str
    valid: bool
    available: bool


class CheckSubdomainUseCase:
    """Use case for live subdomain availability checks on the setup page."""

    def __init__(self, tenant_service: TenantService) -> None:
        self.tenant_service = tenant_service

    async def execute(self, request: CheckSubdomainRequest) -> CheckSubdomainResponse:
        if not Subdomain.is_valid(request.subdomain):
            return CheckSubdomainResponse(
                subdomain=request.subdomain, valid=False, available=False
            )

        subdomain = Subdomain(request.subdomain)
        available = await self.tenant_service.is_subdomain_available(subdomain)
        return CheckSubdomainResponse(
            subdomain=subdomain.root, valid=True, available=available
        )

    async def suggest(self, organization_name: str) -> CheckSubdomainResponse:
        """Slug an organization name and report whether the slug is usable."""
        return await self.execute(
            CheckSubdomainRequest(subdomain=Subdomain.suggest(organization_name))
        )

"""Tenant use cases."""

from protrack.application.usecase.tenant.check_subdomain import (
    CheckSubdomainRequest,
    CheckSubdomainResponse,
    CheckSubdomainUseCase,
)
from protrack.application.usecase.tenant.create_tenant import (
    CreateTenantRequest,
    CreateTenantResponse,
    CreateTenantUseCase,
)
from protrack.application.usecase.tenant.get_current_tenant import (
    GetCurrentTenantRequest,
    GetCurrentTenantUseCase,
)

__all__ = [
    "CheckSubdomainRequest",
    "CheckSubdomainResponse",
    "CheckSubdomainUseCase",
    "CreateTenantRequest",
    "CreateTenantResponse",
    "CreateTenantUseCase",
    "GetCurrentTenantRequest",
    "GetCurrentTenantUseCase",
]

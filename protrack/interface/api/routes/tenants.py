"""Tenant routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel, Field

from protrack.application.usecase.session import AuthenticateUseCase
from protrack.application.usecase.tenant import (
    CheckSubdomainRequest,
    CheckSubdomainResponse,
    CheckSubdomainUseCase,
    CreateTenantRequest,
    CreateTenantResponse,
    CreateTenantUseCase,
    GetCurrentTenantRequest,
    GetCurrentTenantUseCase,
)
from protrack.application.usecase.views import TenantItem
from protrack.interface.api.auth import require_user

router = APIRouter(prefix="/tenants", tags=["tenants"], route_class=DishkaRoute)


class CreateTenantAPIRequest(BaseModel):
    """API request for setting up an organization."""

    subdomain: str = Field(min_length=1, max_length=63)
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    plan: str = "professional"


@router.post("", response_model=CreateTenantResponse, status_code=status.HTTP_201_CREATED)
async def create_tenant(
    request: CreateTenantAPIRequest,
    create_tenant_use_case: FromDishka[CreateTenantUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    authorization: str | None = Header(default=None),
) -> CreateTenantResponse:
    """Create the caller's organization and make the caller its master user.

    409 when the subdomain is taken.
    """
    user = await require_user(authorization, authenticate_use_case)
    return await create_tenant_use_case.execute(
        CreateTenantRequest(actor_id=user.user_id, **request.model_dump())
    )


@router.get("/subdomains/{subdomain}", response_model=CheckSubdomainResponse)
async def check_subdomain(
    subdomain: str,
    check_subdomain_use_case: FromDishka[CheckSubdomainUseCase],
) -> CheckSubdomainResponse:
    """Check whether a subdomain is well formed and still free."""
    return await check_subdomain_use_case.execute(
        CheckSubdomainRequest(subdomain=subdomain)
    )


@router.get("/subdomain-suggestion", response_model=CheckSubdomainResponse)
async def suggest_subdomain(
    name: str,
    check_subdomain_use_case: FromDishka[CheckSubdomainUseCase],
) -> CheckSubdomainResponse:
    """Suggest a subdomain for an organization name."""
    return await check_subdomain_use_case.suggest(name)


@router.get("/current", response_model=TenantItem)
async def get_current_tenant(
    get_current_tenant_use_case: FromDishka[GetCurrentTenantUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    authorization: str | None = Header(default=None),
) -> TenantItem:
    """Return the caller's tenant."""
    user = await require_user(authorization, authenticate_use_case)
    return await get_current_tenant_use_case.execute(
        GetCurrentTenantRequest(actor_id=user.user_id)
    )

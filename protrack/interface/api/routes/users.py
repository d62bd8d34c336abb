"""User management routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header
from pydantic import BaseModel

from protrack.application.usecase.session import AuthenticateUseCase
from protrack.application.usecase.user import (
    DeactivateUserRequest,
    DeactivateUserUseCase,
    ListUsersRequest,
    ListUsersResponse,
    ListUsersUseCase,
    UpdateUserRequest,
    UpdateUserUseCase,
)
from protrack.application.usecase.views import UserItem
from protrack.domain.value import AccessLevel, Resource, Role
from protrack.interface.api.auth import require_user

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpdateUserAPIRequest(BaseModel):
    """API request for updating a member."""

    role: Role | None = None
    permissions: dict[Resource, AccessLevel] | None = None
    is_active: bool | None = None


@router.get("", response_model=ListUsersResponse)
async def list_users(
    list_users_use_case: FromDishka[ListUsersUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    authorization: str | None = Header(default=None),
) -> ListUsersResponse:
    """List members of the caller's tenant."""
    user = await require_user(authorization, authenticate_use_case)
    return await list_users_use_case.execute(ListUsersRequest(actor_id=user.user_id))


@router.patch("/{user_id}", response_model=UserItem)
async def update_user(
    user_id: UUID,
    request: UpdateUserAPIRequest,
    update_user_use_case: FromDishka[UpdateUserUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    authorization: str | None = Header(default=None),
) -> UserItem:
    """Change a member's role, permissions or active flag."""
    user = await require_user(authorization, authenticate_use_case)
    return await update_user_use_case.execute(
        UpdateUserRequest(
            actor_id=user.user_id,
            user_id=str(user_id),
            role=request.role,
            permissions=request.permissions,
            is_active=request.is_active,
        )
    )


@router.post("/{user_id}/deactivate", response_model=UserItem)
async def deactivate_user(
    user_id: UUID,
    deactivate_user_use_case: FromDishka[DeactivateUserUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    authorization: str | None = Header(default=None),
) -> UserItem:
    """Deactivate a member. Deactivating yourself is refused."""
    user = await require_user(authorization, authenticate_use_case)
    return await deactivate_user_use_case.execute(
        DeactivateUserRequest(actor_id=user.user_id, user_id=str(user_id))
    )

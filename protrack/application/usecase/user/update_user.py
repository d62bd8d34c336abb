"""Update user use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from protrack.application.usecase.base import BaseUseCase
from protrack.application.usecase.views import UserItem
from protrack.domain.service import AccessService, UserService
from protrack.domain.value import AccessLevel, PermissionSet, Resource, Role, UserId


class UpdateUserRequest(BaseModel):
    """Update user request.

    Fields left as None are not changed.
    """

    actor_id: str  # From authenticated user
    user_id: str
    role: Role | None = None
    permissions: dict[Resource, AccessLevel] | None = None
    is_active: bool | None = None


class UpdateUserUseCase(BaseUseCase):
    """Use case for changing a member's role, permissions or active flag."""

    def __init__(self, user_service: UserService, access_service: AccessService) -> None:
        """Initialize update user use case.

        Args:
            user_service: User domain service
            access_service: Access control service
        """
        self.user_service = user_service
        self.access_service = access_service

    async def execute(self, request: UpdateUserRequest) -> UserItem:
        """Execute update user flow.

        Raises:
            Unauthorized: If the actor lacks write access to users, or tries
                to deactivate itself
            NotFoundError: If the user is not in the actor's tenant
        """
        with logfire.span(
            "update_user.execute", actor_id=request.actor_id, user_id=request.user_id
        ):
            actor = await self.user_service.get_by_id(UserId(UUID(request.actor_id)))
            scope = self.access_service.require(actor, Resource.USERS, AccessLevel.WRITE)

            user = await self.user_service.update_access(
                scope,
                actor,
                UserId(UUID(request.user_id)),
                role=request.role,
                permissions=(
                    PermissionSet(request.permissions)
                    if request.permissions is not None
                    else None
                ),
                is_active=request.is_active,
            )
            return UserItem.from_domain(user)

"""Deactivate user use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from protrack.application.usecase.views import UserItem
from protrack.domain.service import AccessService, UserService
from protrack.domain.value import AccessLevel, Resource, UserId


class DeactivateUserRequest(BaseModel):
    """Deactivate user request."""

    actor_id: str  # From authenticated user
    user_id: str


class DeactivateUserUseCase:
    """Use case for switching a member off. Records are kept."""

    def __init__(self, user_service: UserService, access_service: AccessService) -> None:
        self.user_service = user_service
        self.access_service = access_service

    async def execute(self, request: DeactivateUserRequest) -> UserItem:
        with logfire.span(
            "deactivate_user.execute", actor_id=request.actor_id, user_id=request.user_id
        ):
            actor = await self.user_service.get_by_id(UserId(UUID(request.actor_id)))
            scope = self.access_service.require(actor, Resource.USERS, AccessLevel.WRITE)
            user = await self.user_service.deactivate(
                scope, actor, UserId(UUID(request.user_id))
            )
            return UserItem.from_domain(user)

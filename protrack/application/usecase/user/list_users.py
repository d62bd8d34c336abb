"""List users use case."""

from uuid import UUID

from pydantic import BaseModel

from protrack.application.usecase.views import UserItem
from protrack.domain.service import AccessService, UserService
from protrack.domain.value import AccessLevel, Resource, UserId


class ListUsersRequest(BaseModel):
    """List users request."""

    actor_id: str  # From authenticated user


class ListUsersResponse(BaseModel):
    """Users of the actor's tenant, oldest first."""

    users: list[UserItem]


class ListUsersUseCase:
    """Use case for the user management screen."""

    def __init__(self, user_service: UserService, access_service: AccessService) -> None:
        self.user_service = user_service
        self.access_service = access_service

    async def execute(self, request: ListUsersRequest) -> ListUsersResponse:
        actor = await self.user_service.get_by_id(UserId(UUID(request.actor_id)))
        scope = self.access_service.require(actor, Resource.USERS, AccessLevel.READ)
        users = await self.user_service.list_members(scope)
        return ListUsersResponse(users=[UserItem.from_domain(u) for u in users])

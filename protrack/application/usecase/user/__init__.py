"""User use cases."""

from protrack.application.usecase.user.deactivate_user import (
    DeactivateUserRequest,
    DeactivateUserUseCase,
)
from protrack.application.usecase.user.list_users import (
    ListUsersRequest,
    ListUsersResponse,
    ListUsersUseCase,
)
from protrack.application.usecase.user.update_user import (
    UpdateUserRequest,
    UpdateUserUseCase,
)

__all__ = [
    "DeactivateUserRequest",
    "DeactivateUserUseCase",
    "ListUsersRequest",
    "ListUsersResponse",
    "ListUsersUseCase",
    "UpdateUserRequest",
    "UpdateUserUseCase",
]

"""User repository interface."""

from abc import ABC, abstractmethod

from protrack.domain.model.user import User
from protrack.domain.value import Email, TenantScope, UserId


class UserRepository(ABC):
    """Repository for User records.

    Lookups by identity id are global because a session resolves its own
    record before it knows its tenant. Every other read takes an explicit
    tenant scope.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> User | None:
        """Find the user record bound to an identity.

        Args:
            user_id: Identity id

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_in_tenant(
        self, scope: TenantScope | None, user_id: UserId
    ) -> User | None:
        """Find a user record within a tenant.

        Raises:
            MissingTenantContext: If scope is None
        """
        pass

    @abstractmethod
    async def find_by_email_in_tenant(
        self, scope: TenantScope | None, email: Email
    ) -> User | None:
        """Find a tenant member by email.

        Raises:
            MissingTenantContext: If scope is None
        """
        pass

    @abstractmethod
    async def list_by_tenant(self, scope: TenantScope | None) -> list[User]:
        """List users of a tenant, oldest first.

        Raises:
            MissingTenantContext: If scope is None
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Upsert a user record keyed by id.

        Saving the same id twice overwrites; it never inserts a duplicate.

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

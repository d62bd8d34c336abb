"""In-memory user repository for testing."""

from protrack.domain.model import User
from protrack.domain.repository import UserRepository
from protrack.domain.value import Email, TenantScope, UserId, require_scope

from .store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, user_id: UserId) -> User | None:
        """Find the user record bound to an identity."""
        return self._store.users.get(user_id)

    async def find_in_tenant(
        self, scope: TenantScope | None, user_id: UserId
    ) -> User | None:
        """Find a user record within a tenant."""
        scope = require_scope(scope, "find_in_tenant")
        user = self._store.users.get(user_id)
        if user and user.tenant_id == scope.tenant_id:
            return user
        return None

    async def find_by_email_in_tenant(
        self, scope: TenantScope | None, email: Email
    ) -> User | None:
        """Find a tenant member by email."""
        scope = require_scope(scope, "find_by_email_in_tenant")
        for user in self._store.users.values():
            if user.tenant_id == scope.tenant_id and user.email == email:
                return user
        return None

    async def list_by_tenant(self, scope: TenantScope | None) -> list[User]:
        """List users of a tenant, oldest first."""
        scope = require_scope(scope, "list_by_tenant")
        users = [u for u in self._store.users.values() if u.tenant_id == scope.tenant_id]
        users.sort(key=lambda u: u.created_at)
        return users

    async def save(self, user: User) -> User:
        """Upsert a user record keyed by id."""
        self._store.users[user.id] = user
        return user

"""Mock persistence providers for testing."""

from dishka import Scope, provide

from protrack.domain.repository import (
    InvitationRepository,
    TenantRepository,
    UserRepository,
)
from protrack.persistence.repository.inmemory import (
    InMemoryInvitationRepository,
    InMemoryStore,
    InMemoryTenantRepository,
    InMemoryUserRepository,
)
from protrack.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are REQUEST-scoped views over one APP-scoped store, so
    concurrent requests against the same container see each other's writes.
    Each test builds its own container and therefore its own store.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryStore:
        """Provide the shared in-memory store."""
        return InMemoryStore()

    @provide(scope=Scope.REQUEST)
    def get_tenant_repository(self, store: InMemoryStore) -> TenantRepository:
        """Provide in-memory tenant repository."""
        return InMemoryTenantRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, store: InMemoryStore) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(self, store: InMemoryStore) -> InvitationRepository:
        """Provide in-memory invitation repository."""
        return InMemoryInvitationRepository(store)

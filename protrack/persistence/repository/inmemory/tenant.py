"""In-memory tenant repository for testing."""

from sqlalchemy.exc import IntegrityError

from protrack.domain.model import Tenant
from protrack.domain.repository import TenantRepository
from protrack.domain.value import Subdomain, TenantId

from .store import InMemoryStore


class InMemoryTenantRepository(TenantRepository):
    """In-memory implementation of TenantRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Find a tenant by ID."""
        return self._store.tenants.get(tenant_id)

    async def exists_subdomain(self, subdomain: Subdomain) -> bool:
        """Check whether a subdomain is already reserved."""
        return any(t.subdomain == subdomain for t in self._store.tenants.values())

    async def create(self, tenant: Tenant) -> Tenant:
        """Insert a new tenant.

        Raises:
            IntegrityError: If the subdomain is already taken
        """
        async with self._store.lock:
            if await self.exists_subdomain(tenant.subdomain):
                raise IntegrityError("Duplicate subdomain", None, Exception())
            self._store.tenants[tenant.id] = tenant
        return tenant

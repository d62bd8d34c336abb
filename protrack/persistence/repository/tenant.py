"""PostgreSQL implementation of Tenant repository."""

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from protrack.domain.model import Tenant
from protrack.domain.repository import TenantRepository
from protrack.domain.value import Subdomain, TenantId
from protrack.persistence.mappers import row_to_tenant, tenant_to_dict
from protrack.persistence.tables import tenants_table


class PostgresTenantRepository(TenantRepository):
    """PostgreSQL implementation of TenantRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Find a tenant by ID."""
        stmt = select(tenants_table).where(tenants_table.c.id == tenant_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_tenant(dict(row)) if row else None

    async def exists_subdomain(self, subdomain: Subdomain) -> bool:
        """Check whether a subdomain is already reserved."""
        stmt = select(tenants_table.c.id).where(
            tenants_table.c.subdomain == subdomain.root
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def create(self, tenant: Tenant) -> Tenant:
        """Insert a new tenant.

        The insert runs in a savepoint so a unique violation leaves the
        request transaction usable.

        Raises:
            IntegrityError: If the subdomain is already taken
        """
        async with self.session.begin_nested():
            await self.session.execute(
                insert(tenants_table).values(**tenant_to_dict(tenant))
            )
        return tenant

"""Tenant repository interface."""

from abc import ABC, abstractmethod

from protrack.domain.model.tenant import Tenant
from protrack.domain.value import Subdomain, TenantId


class TenantRepository(ABC):
    """Repository for Tenant aggregate.

    Defines the contract for tenant persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Find a tenant by ID.

        Args:
            tenant_id: The tenant's unique identifier

        Returns:
            The tenant if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists_subdomain(self, subdomain: Subdomain) -> bool:
        """Check whether a subdomain is already reserved.

        Args:
            subdomain: Subdomain to check

        Returns:
            True if a tenant already uses the subdomain
        """
        pass

    @abstractmethod
    async def create(self, tenant: Tenant) -> Tenant:
        """Insert a new tenant.

        Args:
            tenant: The tenant to insert

        Returns:
            The saved tenant

        Raises:
            IntegrityError: If the subdomain is already taken
        """
        pass

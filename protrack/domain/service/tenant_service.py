"""Tenant domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from protrack.domain.error import NotFoundError, SubdomainTaken
from protrack.domain.model.tenant import Tenant
from protrack.domain.repository import TenantRepository
from protrack.domain.value import Subdomain, TenantId, TenantStatus

from .base import Service


class TenantService(Service):
    """Domain service for tenant operations."""

    def __init__(self, tenant_repository: TenantRepository) -> None:
        """Initialize tenant service.

        Args:
            tenant_repository: Tenant repository
        """
        self.tenant_repository = tenant_repository

    async def get_by_id(self, tenant_id: TenantId) -> Tenant:
        """Get tenant by ID.

        Raises:
            NotFoundError: If tenant not found
        """
        with logfire.span("tenant_service.get_by_id", tenant_id=str(tenant_id)):
            tenant = await self.tenant_repository.find_by_id(tenant_id)
            if not tenant:
                logfire.warn("Tenant not found", tenant_id=str(tenant_id))
                raise NotFoundError("Tenant", str(tenant_id))
            return tenant

    async def is_subdomain_available(self, subdomain: Subdomain) -> bool:
        """Check whether a subdomain can still be reserved."""
        with logfire.span(
            "tenant_service.is_subdomain_available", subdomain=subdomain.root
        ):
            taken = await self.tenant_repository.exists_subdomain(subdomain)
            logfire.info(
                "Subdomain availability checked",
                subdomain=subdomain.root,
                available=not taken,
            )
            return not taken

    async def create_tenant(
        self,
        subdomain: Subdomain,
        name: str,
        email: str,
        phone: str | None,
        plan: str,
    ) -> Tenant:
        """Reserve a subdomain and create the tenant.

        Check-then-insert; the store's unique constraint on subdomain is the
        backstop when two requests race past the check.

        Raises:
            SubdomainTaken: If the subdomain is already reserved
        """
        with logfire.span(
            "tenant_service.create_tenant", subdomain=subdomain.root, plan=plan
        ):
            if not await self.is_subdomain_available(subdomain):
                raise SubdomainTaken(subdomain.root)

            now = datetime.now(timezone.utc)
            tenant = Tenant(
                id=TenantId(uuid4()),
                subdomain=subdomain,
                name=name,
                email=email,
                phone=phone or None,
                plan=plan,
                status=TenantStatus.ACTIVE,
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.tenant_repository.create(tenant)
            except IntegrityError:
                logfire.warn("Subdomain reserved concurrently", subdomain=subdomain.root)
                raise SubdomainTaken(subdomain.root)

            logfire.info(
                "Tenant created", tenant_id=str(saved.id), subdomain=subdomain.root
            )
            return saved

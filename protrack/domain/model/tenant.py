"""Tenant aggregate root.

A tenant is an isolated organization. Its data is never visible to
another tenant.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from protrack.domain.model.common import DomainModel
from protrack.domain.value import Subdomain, TenantId, TenantStatus


class Tenant(DomainModel):
    """Tenant aggregate root.

    Business rules:
    - Created once, at setup time, by the first user of an organization
    - Subdomain is unique across tenants and immutable after creation
    """

    id: TenantId
    subdomain: Subdomain
    name: str = Field(min_length=1, max_length=255)
    email: str
    phone: Optional[str] = None
    plan: str = "professional"
    status: TenantStatus = TenantStatus.ACTIVE
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

"""PostgreSQL repository implementations."""

from protrack.persistence.repository.invitation import PostgresInvitationRepository
from protrack.persistence.repository.tenant import PostgresTenantRepository
from protrack.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresInvitationRepository",
    "PostgresTenantRepository",
    "PostgresUserRepository",
]

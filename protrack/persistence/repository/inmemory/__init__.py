"""In-memory repository implementations for testing."""

from .invitation import InMemoryInvitationRepository
from .store import InMemoryStore
from .tenant import InMemoryTenantRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryInvitationRepository",
    "InMemoryStore",
    "InMemoryTenantRepository",
    "InMemoryUserRepository",
]

"""Repository interfaces for ProTrack domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from protrack.domain.repository.invitation import InvitationRepository
from protrack.domain.repository.tenant import TenantRepository
from protrack.domain.repository.user import UserRepository

__all__ = [
    "InvitationRepository",
    "TenantRepository",
    "UserRepository",
]

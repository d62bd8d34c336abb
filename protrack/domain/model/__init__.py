"""Domain model entities for ProTrack."""

from protrack.domain.model.invitation import Invitation
from protrack.domain.model.tenant import Tenant
from protrack.domain.model.user import User

__all__ = [
    "Invitation",
    "Tenant",
    "User",
]

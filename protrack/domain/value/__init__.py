"""Domain value objects for ProTrack."""

from protrack.domain.value.identifiers import InvitationId, TenantId, UserId
from protrack.domain.value.session import (
    GuardDecision,
    GuardOutcome,
    IdentityPhase,
    MembershipPhase,
    PageAccess,
    SessionReadiness,
)
from protrack.domain.value.types import (
    AccessLevel,
    DeliveryChannel,
    Email,
    Identity,
    InvitationStatus,
    InvitationToken,
    PermissionSet,
    Resource,
    Role,
    Subdomain,
    TenantScope,
    TenantStatus,
    require_scope,
)

__all__ = [
    # Identifiers
    "TenantId",
    "UserId",
    "InvitationId",
    # Types
    "AccessLevel",
    "DeliveryChannel",
    "Email",
    "Identity",
    "InvitationStatus",
    "InvitationToken",
    "PermissionSet",
    "Resource",
    "Role",
    "Subdomain",
    "TenantScope",
    "TenantStatus",
    "require_scope",
    # Session
    "GuardDecision",
    "GuardOutcome",
    "IdentityPhase",
    "MembershipPhase",
    "PageAccess",
    "SessionReadiness",
]

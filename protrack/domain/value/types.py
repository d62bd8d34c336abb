"""Domain value objects for ProTrack.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from protrack.domain.error import MissingTenantContext
from protrack.domain.value.common import RootValueObject, ValueObject
from protrack.domain.value.identifiers import TenantId, UserId

SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]{1,48}[a-z0-9]$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Role(str, Enum):
    """Role of a user within a tenant.

    A role only selects the default permission template when a user is
    created or re-templated. Authorization never reads it.
    """

    MASTER = "master"
    ENTRY = "entry"
    VIEW = "view"


class AccessLevel(str, Enum):
    """Access level granted on a single resource."""

    NONE = "none"
    READ = "read"
    WRITE = "write"

    @property
    def rank(self) -> int:
        """Ordering used to compare levels (none < read < write)."""
        return _ACCESS_RANK[self]


_ACCESS_RANK = {AccessLevel.NONE: 0, AccessLevel.READ: 1, AccessLevel.WRITE: 2}


class Resource(str, Enum):
    """Permission-gated resources of a tenant."""

    MATERIAL = "material"
    LABOR = "labor"
    EQUIPMENT = "equipment"
    SUBCONTRACTOR = "subcontractor"
    OTHERS = "others"
    CAP_LEASES = "capLeases"
    CONSUMABLE = "consumable"
    INVOICES = "invoices"
    PROJECTS = "projects"
    USERS = "users"


COST_RESOURCES = (
    Resource.MATERIAL,
    Resource.LABOR,
    Resource.EQUIPMENT,
    Resource.SUBCONTRACTOR,
    Resource.OTHERS,
    Resource.CAP_LEASES,
    Resource.CONSUMABLE,
)


class InvitationStatus(str, Enum):
    """Status of an invitation.

    Transitions are monotone: pending -> accepted or pending -> expired.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"


class DeliveryChannel(str, Enum):
    """Email channel used to deliver an invitation."""

    NEW_ACCOUNT = "new_account"
    EXISTING_ACCOUNT = "existing_account"


class TenantStatus(str, Enum):
    """Status of a tenant."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    CANCELLED = "cancelled"


class PermissionSet(RootValueObject[dict[Resource, AccessLevel]]):
    """Per-resource access map.

    Every resource is always present; resources missing from the input are
    filled in with ``none``.
    """

    @field_validator("root")
    @classmethod
    def fill_missing_resources(
        cls, v: dict[Resource, AccessLevel]
    ) -> dict[Resource, AccessLevel]:
        """Complete the map so every resource has an explicit level."""
        return {resource: v.get(resource, AccessLevel.NONE) for resource in Resource}

    def level(self, resource: Resource) -> AccessLevel:
        """Access level for a resource."""
        return self.root[resource]

    def allows(self, resource: Resource, required: AccessLevel) -> bool:
        """Whether the stored level on ``resource`` satisfies ``required``."""
        return self.level(resource).rank >= required.rank

    def to_json(self) -> dict[str, str]:
        """Plain JSON form, as stored in the permissions column."""
        return {resource.value: level.value for resource, level in self.root.items()}

    @classmethod
    def uniform(cls, level: AccessLevel) -> "PermissionSet":
        """Same level on every resource."""
        return cls({resource: level for resource in Resource})

    @classmethod
    def unassigned(cls) -> "PermissionSet":
        """Permissions of a user record created before it joins a tenant."""
        permissions = {resource: AccessLevel.READ for resource in Resource}
        permissions[Resource.USERS] = AccessLevel.NONE
        return cls(permissions)

    @classmethod
    def for_role(cls, role: Role) -> "PermissionSet":
        """Default permission template for a role."""
        if role == Role.MASTER:
            return cls.uniform(AccessLevel.WRITE)

        if role == Role.ENTRY:
            permissions = {resource: AccessLevel.WRITE for resource in COST_RESOURCES}
            permissions[Resource.INVOICES] = AccessLevel.READ
            permissions[Resource.PROJECTS] = AccessLevel.READ
            permissions[Resource.USERS] = AccessLevel.NONE
            return cls(permissions)

        permissions = {resource: AccessLevel.READ for resource in Resource}
        permissions[Resource.USERS] = AccessLevel.NONE
        return cls(permissions)


class Email(RootValueObject[str]):
    """Email address, normalized to lowercase without surrounding whitespace."""

    @field_validator("root")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize and validate email format."""
        normalized = v.strip().lower()
        if len(normalized) > 255 or not EMAIL_PATTERN.match(normalized):
            raise ValueError("Invalid email address")
        return normalized


class Subdomain(RootValueObject[str]):
    """Tenant workspace subdomain.

    3-50 characters, alphanumeric and hyphens, starting and ending with an
    alphanumeric character. Stored lowercase.
    """

    @field_validator("root")
    @classmethod
    def validate_subdomain(cls, v: str) -> str:
        """Validate subdomain format."""
        normalized = v.strip().lower()
        if not SUBDOMAIN_PATTERN.match(normalized):
            raise ValueError(
                "Subdomain must be 3-50 characters, alphanumeric and hyphens only"
            )
        return normalized

    @staticmethod
    def is_valid(value: str) -> bool:
        """Check a raw value without raising."""
        return bool(SUBDOMAIN_PATTERN.match(value.strip().lower()))

    @staticmethod
    def suggest(organization_name: str) -> str:
        """Derive a subdomain suggestion from an organization name."""
        slug = re.sub(r"[^a-z0-9\s-]", "", organization_name.lower()).strip()
        slug = re.sub(r"\s+", "-", slug)
        return re.sub(r"-+", "-", slug)


class InvitationToken(RootValueObject[str]):
    """URL-safe invitation token."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v

    def redacted(self) -> str:
        """Token prefix safe to put in logs."""
        return self.root[:8] + "..."


class Identity(ValueObject):
    """Principal as reported by the identity provider.

    The id is shared with the user record bound to this identity.
    """

    id: UserId
    email: Email
    email_confirmed: bool = False
    display_name: str | None = None


class TenantScope(ValueObject):
    """Explicit tenant scope passed to every tenant-scoped store call."""

    tenant_id: TenantId


def require_scope(scope: TenantScope | None, operation: str) -> TenantScope:
    """Return the scope or fail loudly when it was not supplied.

    Args:
        scope: Tenant scope passed by the caller
        operation: Name of the store operation, for the error message

    Returns:
        The same scope

    Raises:
        MissingTenantContext: If scope is None
    """
    if scope is None:
        raise MissingTenantContext(operation)
    return scope

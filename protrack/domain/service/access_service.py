"""Access control domain service."""

import logfire

from protrack.domain.error import Unauthorized
from protrack.domain.model import User
from protrack.domain.value import AccessLevel, Resource, TenantScope

from .base import Service


class AccessService(Service):
    """Checks stored per-resource permissions.

    The role label is never consulted here.
    """

    def require(
        self, user: User, resource: Resource, level: AccessLevel
    ) -> TenantScope:
        """Ensure the user may act on a resource of its tenant.

        Args:
            user: Acting user record
            resource: Resource being accessed
            level: Required access level

        Returns:
            Tenant scope of the acting user

        Raises:
            Unauthorized: If the user has no tenant, is inactive, or lacks the level
        """
        if user.tenant_id is None:
            raise Unauthorized("User does not belong to an organization")

        if not user.is_active:
            raise Unauthorized("User is deactivated")

        if not user.permissions.allows(resource, level):
            logfire.warn(
                "Permission denied",
                user_id=str(user.id),
                resource=resource.value,
                required=level.value,
                granted=user.permissions.level(resource).value,
            )
            raise Unauthorized(
                f"{level.value} access to {resource.value} is required"
            )

        return TenantScope(tenant_id=user.tenant_id)

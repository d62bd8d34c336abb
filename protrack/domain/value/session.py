"""Session readiness and routing decisions.

The guard never looks at timers or callbacks. It switches on one combined
readiness value built from two phases: identity and tenant membership.
"""

from datetime import datetime
from enum import Enum

from protrack.domain.value.common import ValueObject


class IdentityPhase(str, Enum):
    """Identity lookup phase."""

    LOADING = "loading"
    ABSENT = "absent"
    PRESENT = "present"


class MembershipPhase(str, Enum):
    """Tenant membership lookup phase.

    ``none`` means the user record has no tenant assigned. ``unavailable``
    means a tenant is assigned but its row could not be loaded right now.
    """

    LOADING = "loading"
    NONE = "none"
    UNAVAILABLE = "unavailable"
    ACTIVE = "active"


class SessionReadiness(ValueObject):
    """Combined readiness of a visiting session."""

    identity: IdentityPhase
    membership: MembershipPhase = MembershipPhase.LOADING
    membership_pending_since: datetime | None = None

    @property
    def has_tenant(self) -> bool:
        """Whether a tenant is assigned, loaded or not."""
        return self.membership in (MembershipPhase.ACTIVE, MembershipPhase.UNAVAILABLE)

    @classmethod
    def loading(cls) -> "SessionReadiness":
        """Nothing resolved yet."""
        return cls(identity=IdentityPhase.LOADING)

    @classmethod
    def anonymous(cls) -> "SessionReadiness":
        """No identity; membership is irrelevant."""
        return cls(identity=IdentityPhase.ABSENT, membership=MembershipPhase.NONE)

    @classmethod
    def identified(
        cls,
        membership: MembershipPhase,
        membership_pending_since: datetime | None = None,
    ) -> "SessionReadiness":
        """Identity resolved, membership in the given phase."""
        return cls(
            identity=IdentityPhase.PRESENT,
            membership=membership,
            membership_pending_since=membership_pending_since,
        )


class PageAccess(ValueObject):
    """What a page demands of the visiting session."""

    path: str = "/"
    requires_auth: bool = True
    requires_tenant: bool = True
    auth_only: bool = False
    tenant_setup: bool = False


class GuardOutcome(str, Enum):
    """Routing decision kinds."""

    WAIT_FOR_LOAD = "wait_for_load"
    REDIRECT_TO_AUTH = "redirect_to_auth"
    REDIRECT_TO_TENANT_SETUP = "redirect_to_tenant_setup"
    REDIRECT_AWAY_FROM_AUTH_PAGE = "redirect_away_from_auth_page"
    RENDER = "render"


class GuardDecision(ValueObject):
    """Routing decision for one evaluation of the guard."""

    outcome: GuardOutcome
    target: str | None = None
    retry_membership: bool = False

"""Tenant resolver guard.

Decides, for one page visit, whether to wait, redirect or render. The
decision is a pure function of the combined session readiness, the page's
requirements and the current time.
"""

from datetime import datetime, timedelta, timezone
from urllib.parse import urlencode

from protrack.config import GuardSettings
from protrack.domain.value import (
    GuardDecision,
    GuardOutcome,
    IdentityPhase,
    MembershipPhase,
    PageAccess,
    SessionReadiness,
)

from .base import Service

AUTH_ONLY_PATHS = ("/login", "/register")
ONBOARDING_PATHS = ("/tenant-setup", "/accept-invitation", "/join-tenant")
PUBLIC_PATHS = ("/",)


def _matches(path: str, prefixes: tuple[str, ...]) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in prefixes)


class TenantResolverGuard(Service):
    """Routing guard for authenticated, tenant-bound pages."""

    def __init__(self, settings: GuardSettings) -> None:
        """Initialize guard.

        Args:
            settings: Guard configuration (wait ceiling and target paths)
        """
        self.settings = settings
        self.ceiling = timedelta(seconds=settings.membership_wait_ceiling_seconds)

    def classify_path(self, path: str) -> PageAccess:
        """Map a URL path to what the page demands of the session."""
        path = path.split("?", 1)[0] or "/"
        if _matches(path, AUTH_ONLY_PATHS):
            return PageAccess(
                path=path, requires_auth=False, requires_tenant=False, auth_only=True
            )
        if path == self.settings.tenant_setup_path:
            return PageAccess(
                path=path, requires_auth=True, requires_tenant=False, tenant_setup=True
            )
        if _matches(path, ONBOARDING_PATHS):
            return PageAccess(path=path, requires_auth=False, requires_tenant=False)
        if path in PUBLIC_PATHS:
            return PageAccess(path=path, requires_auth=False, requires_tenant=False)
        return PageAccess(path=path, requires_auth=True, requires_tenant=True)

    def _membership_still_loading(
        self, readiness: SessionReadiness, now: datetime
    ) -> bool:
        if readiness.membership != MembershipPhase.LOADING:
            return False
        if readiness.membership_pending_since is None:
            return True
        return now - readiness.membership_pending_since < self.ceiling

    def resolve(
        self,
        readiness: SessionReadiness,
        page: PageAccess,
        now: datetime | None = None,
    ) -> GuardDecision:
        """Evaluate the routing rules in order.

        Args:
            readiness: Combined identity and membership phases
            page: Requirements of the visited page
            now: Evaluation time, defaults to the current UTC time

        Returns:
            The routing decision
        """
        now = now or datetime.now(timezone.utc)

        if readiness.identity == IdentityPhase.LOADING:
            return GuardDecision(outcome=GuardOutcome.WAIT_FOR_LOAD)

        if readiness.identity == IdentityPhase.ABSENT:
            if page.requires_auth:
                query = urlencode({"redirectTo": page.path})
                return GuardDecision(
                    outcome=GuardOutcome.REDIRECT_TO_AUTH,
                    target=f"{self.settings.login_path}?{query}",
                )
            return GuardDecision(outcome=GuardOutcome.RENDER)

        if self._membership_still_loading(readiness, now):
            return GuardDecision(outcome=GuardOutcome.WAIT_FOR_LOAD)

        # Past the ceiling a loading membership is unconfirmed, never absent.
        timed_out = readiness.membership == MembershipPhase.LOADING

        if page.auth_only:
            target = (
                self.settings.dashboard_path
                if readiness.has_tenant or timed_out
                else self.settings.tenant_setup_path
            )
            return GuardDecision(
                outcome=GuardOutcome.REDIRECT_AWAY_FROM_AUTH_PAGE, target=target
            )

        if page.tenant_setup and readiness.has_tenant:
            return GuardDecision(
                outcome=GuardOutcome.REDIRECT_AWAY_FROM_AUTH_PAGE,
                target=self.settings.dashboard_path,
            )

        if page.requires_tenant:
            if readiness.membership == MembershipPhase.NONE:
                return GuardDecision(
                    outcome=GuardOutcome.REDIRECT_TO_TENANT_SETUP,
                    target=self.settings.tenant_setup_path,
                )
            if readiness.membership == MembershipPhase.UNAVAILABLE or timed_out:
                return GuardDecision(
                    outcome=GuardOutcome.RENDER, retry_membership=True
                )

        return GuardDecision(outcome=GuardOutcome.RENDER)

"""Resolve session use case."""

import asyncio
from datetime import datetime, timezone

import logfire
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from protrack.application.usecase.base import upstream
from protrack.application.usecase.views import TenantItem, UserItem
from protrack.domain.error import NotFoundError
from protrack.domain.model import Tenant, User
from protrack.domain.service import (
    IdentityService,
    TenantResolverGuard,
    TenantService,
    UserService,
)
from protrack.domain.value import (
    GuardOutcome,
    IdentityPhase,
    MembershipPhase,
    SessionReadiness,
)


class ResolveSessionRequest(BaseModel):
    """Resolve session request."""

    access_token: str | None = None
    path: str = "/"


class ResolveSessionResponse(BaseModel):
    """Routing decision for a page visit, with what was resolved on the way."""

    outcome: GuardOutcome
    target: str | None = None
    retry_membership: bool = False
    identity: IdentityPhase
    membership: MembershipPhase
    user: UserItem | None = None
    tenant: TenantItem | None = None


class ResolveSessionUseCase:
    """Server-side tenant resolution for one page visit.

    Verifies the caller, loads or creates its user record, loads its tenant
    within the guard's wait ceiling, and asks the guard what to do.
    """

    def __init__(
        self,
        identity_service: IdentityService,
        user_service: UserService,
        tenant_service: TenantService,
        guard: TenantResolverGuard,
    ) -> None:
        self.identity_service = identity_service
        self.user_service = user_service
        self.tenant_service = tenant_service
        self.guard = guard

    async def _load_membership(
        self, user: User
    ) -> tuple[MembershipPhase, Tenant | None]:
        if user.tenant_id is None:
            return MembershipPhase.NONE, None

        try:
            tenant = await asyncio.wait_for(
                self.tenant_service.get_by_id(user.tenant_id),
                timeout=self.guard.ceiling.total_seconds(),
            )
        except asyncio.TimeoutError:
            logfire.warn("Tenant lookup timed out", tenant_id=str(user.tenant_id))
            return MembershipPhase.UNAVAILABLE, None
        except (SQLAlchemyError, NotFoundError) as e:
            logfire.warn(
                "Tenant lookup failed", tenant_id=str(user.tenant_id), error=str(e)
            )
            return MembershipPhase.UNAVAILABLE, None

        return MembershipPhase.ACTIVE, tenant

    async def execute(self, request: ResolveSessionRequest) -> ResolveSessionResponse:
        """Resolve the session and decide the route.

        Raises:
            UpstreamUnavailable: If the identity provider fails
        """
        page = self.guard.classify_path(request.path)
        with logfire.span("resolve_session.execute", path=page.path):
            identity = None
            if request.access_token:
                with upstream("identity provider"):
                    identity = await self.identity_service.authenticate(
                        request.access_token
                    )

            if identity is None:
                readiness = SessionReadiness.anonymous()
                decision = self.guard.resolve(readiness, page)
                return ResolveSessionResponse(
                    outcome=decision.outcome,
                    target=decision.target,
                    retry_membership=decision.retry_membership,
                    identity=readiness.identity,
                    membership=readiness.membership,
                )

            user = await self.user_service.ensure_user(identity)
            membership, tenant = await self._load_membership(user)
            readiness = SessionReadiness.identified(membership)
            decision = self.guard.resolve(readiness, page, datetime.now(timezone.utc))

            logfire.info(
                "Session resolved",
                user_id=str(user.id),
                membership=membership.value,
                outcome=decision.outcome.value,
            )
            return ResolveSessionResponse(
                outcome=decision.outcome,
                target=decision.target,
                retry_membership=decision.retry_membership,
                identity=readiness.identity,
                membership=readiness.membership,
                user=UserItem.from_domain(user),
                tenant=TenantItem.from_domain(tenant) if tenant else None,
            )

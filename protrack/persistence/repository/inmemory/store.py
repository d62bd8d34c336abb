"""Shared state for in-memory repositories."""

import asyncio

from protrack.domain.model import Invitation, Tenant, User
from protrack.domain.value import InvitationId, TenantId, UserId


class InMemoryStore:
    """Tables of the in-memory repositories.

    One store outlives many repository instances so several requests can
    observe each other's writes. Conditional writes take ``lock``.
    """

    def __init__(self) -> None:
        self.tenants: dict[TenantId, Tenant] = {}
        self.users: dict[UserId, User] = {}
        self.invitations: dict[InvitationId, Invitation] = {}
        self.lock = asyncio.Lock()

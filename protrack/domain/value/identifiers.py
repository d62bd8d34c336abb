"""Strongly typed identifiers for ProTrack domain entities.

Using NewType for strong typing prevents mixing up different entity IDs.
A UserId is always the identity provider's id for the same principal.
"""

from typing import NewType
from uuid import UUID

TenantId = NewType("TenantId", UUID)
UserId = NewType("UserId", UUID)
InvitationId = NewType("InvitationId", UUID)

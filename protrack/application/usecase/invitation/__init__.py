"""Invitation use cases."""

from protrack.application.usecase.invitation.accept_invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
)
from protrack.application.usecase.invitation.cancel_invitation import (
    CancelInvitationRequest,
    CancelInvitationResponse,
    CancelInvitationUseCase,
)
from protrack.application.usecase.invitation.get_invitation import (
    GetInvitationRequest,
    GetInvitationResponse,
    GetInvitationUseCase,
)
from protrack.application.usecase.invitation.issue_invitation import (
    IssueInvitationRequest,
    IssueInvitationResponse,
    IssueInvitationUseCase,
)
from protrack.application.usecase.invitation.join_tenant import (
    JoinTenantRequest,
    JoinTenantResponse,
    JoinTenantUseCase,
)
from protrack.application.usecase.invitation.list_invitations import (
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
)
from protrack.application.usecase.invitation.resend_invitation import (
    ResendInvitationRequest,
    ResendInvitationResponse,
    ResendInvitationUseCase,
)

__all__ = [
    "AcceptInvitationRequest",
    "AcceptInvitationResponse",
    "AcceptInvitationUseCase",
    "CancelInvitationRequest",
    "CancelInvitationResponse",
    "CancelInvitationUseCase",
    "GetInvitationRequest",
    "GetInvitationResponse",
    "GetInvitationUseCase",
    "IssueInvitationRequest",
    "IssueInvitationResponse",
    "IssueInvitationUseCase",
    "JoinTenantRequest",
    "JoinTenantResponse",
    "JoinTenantUseCase",
    "ListInvitationsRequest",
    "ListInvitationsResponse",
    "ListInvitationsUseCase",
    "ResendInvitationRequest",
    "ResendInvitationResponse",
    "ResendInvitationUseCase",
]

"""Invitation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, status
from pydantic import BaseModel, Field

from protrack.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CancelInvitationRequest,
    CancelInvitationResponse,
    CancelInvitationUseCase,
    GetInvitationRequest,
    GetInvitationResponse,
    GetInvitationUseCase,
    IssueInvitationRequest,
    IssueInvitationResponse,
    IssueInvitationUseCase,
    JoinTenantRequest,
    JoinTenantResponse,
    JoinTenantUseCase,
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
    ResendInvitationRequest,
    ResendInvitationResponse,
    ResendInvitationUseCase,
)
from protrack.application.usecase.session import AuthenticateUseCase
from protrack.domain.value import AccessLevel, Resource, Role
from protrack.interface.api.auth import require_user

router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)


class IssueInvitationAPIRequest(BaseModel):
    """API request for issuing an invitation.

    Permissions default to the role's template when omitted.
    """

    email: str = Field(min_length=3, max_length=255)
    role: Role
    permissions: dict[Resource, AccessLevel] | None = None


class JoinTenantAPIRequest(BaseModel):
    """API request for joining a tenant with an invitation token."""

    token: str = Field(min_length=1)


@router.get("/lookup", response_model=GetInvitationResponse)
async def lookup_invitation(
    get_invitation_use_case: FromDishka[GetInvitationUseCase],
    token: str = Query(min_length=1, max_length=255),
) -> GetInvitationResponse:
    """Show a pending invitation to the person who received the link.

    404 when the token matches no pending invitation, 400 when it expired.
    """
    return await get_invitation_use_case.execute(GetInvitationRequest(token=token))


@router.post("/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    request: AcceptInvitationRequest,
    accept_invitation_use_case: FromDishka[AcceptInvitationUseCase],
) -> AcceptInvitationResponse:
    """Set a password and activate the invited account."""
    return await accept_invitation_use_case.execute(request)


@router.post("/join", response_model=JoinTenantResponse)
async def join_tenant(
    request: JoinTenantAPIRequest,
    join_tenant_use_case: FromDishka[JoinTenantUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    authorization: str | None = Header(default=None),
) -> JoinTenantResponse:
    """Join the inviting tenant as an already signed-in identity."""
    user = await require_user(authorization, authenticate_use_case)
    return await join_tenant_use_case.execute(
        JoinTenantRequest(actor_id=user.user_id, token=request.token)
    )


@router.post(
    "", response_model=IssueInvitationResponse, status_code=status.HTTP_201_CREATED
)
async def issue_invitation(
    request: IssueInvitationAPIRequest,
    issue_invitation_use_case: FromDishka[IssueInvitationUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    authorization: str | None = Header(default=None),
) -> IssueInvitationResponse:
    """Invite an email address into the caller's tenant."""
    user = await require_user(authorization, authenticate_use_case)
    return await issue_invitation_use_case.execute(
        IssueInvitationRequest(
            actor_id=user.user_id,
            email=request.email,
            role=request.role,
            permissions=request.permissions,
        )
    )


@router.get("", response_model=ListInvitationsResponse)
async def list_invitations(
    list_invitations_use_case: FromDishka[ListInvitationsUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    authorization: str | None = Header(default=None),
) -> ListInvitationsResponse:
    """List pending invitations of the caller's tenant."""
    user = await require_user(authorization, authenticate_use_case)
    return await list_invitations_use_case.execute(
        ListInvitationsRequest(actor_id=user.user_id)
    )


@router.post("/{invitation_id}/resend", response_model=ResendInvitationResponse)
async def resend_invitation(
    invitation_id: UUID,
    resend_invitation_use_case: FromDishka[ResendInvitationUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    authorization: str | None = Header(default=None),
) -> ResendInvitationResponse:
    """Send a pending invitation again and extend its deadline."""
    user = await require_user(authorization, authenticate_use_case)
    return await resend_invitation_use_case.execute(
        ResendInvitationRequest(actor_id=user.user_id, invitation_id=str(invitation_id))
    )


@router.post("/{invitation_id}/cancel", response_model=CancelInvitationResponse)
async def cancel_invitation(
    invitation_id: UUID,
    cancel_invitation_use_case: FromDishka[CancelInvitationUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    authorization: str | None = Header(default=None),
) -> CancelInvitationResponse:
    """Withdraw an invitation."""
    user = await require_user(authorization, authenticate_use_case)
    return await cancel_invitation_use_case.execute(
        CancelInvitationRequest(actor_id=user.user_id, invitation_id=str(invitation_id))
    )

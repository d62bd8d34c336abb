"""Session resolution routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query

from protrack.application.usecase.session import (
    ResolveSessionRequest,
    ResolveSessionResponse,
    ResolveSessionUseCase,
)
from protrack.interface.api.auth import bearer_token

router = APIRouter(prefix="/session", tags=["session"], route_class=DishkaRoute)


@router.get("/resolve", response_model=ResolveSessionResponse)
async def resolve_session(
    resolve_session_use_case: FromDishka[ResolveSessionUseCase],
    path: str = Query(default="/"),
    authorization: str | None = Header(default=None),
) -> ResolveSessionResponse:
    """Decide whether a page visit should wait, redirect or render.

    Anonymous callers are allowed; a rejected token counts as anonymous.

    Example:
        GET /session/resolve?path=/dashboard

        Response:
        {
            "outcome": "redirect_to_tenant_setup",
            "target": "/tenant-setup",
            "retry_membership": false,
            "identity": "present",
            "membership": "none",
            ...
        }
    """
    return await resolve_session_use_case.execute(
        ResolveSessionRequest(access_token=bearer_token(authorization), path=path)
    )

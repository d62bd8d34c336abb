"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from protrack.config import Settings
from protrack.interface.api.routes import (
    health,
    invitations,
    session,
    tenants,
    users,
)
from protrack.interface.error import register_exception_handlers
from protrack.util.di.container import create_container, setup_di
from protrack.util.observability import instrument_fastapi, instrument_httpx

ROUTERS = (
    health.router,
    session.router,
    tenants.router,
    invitations.router,
    users.router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Disposes the engine and the identity provider's HTTP client
    await app.state.dishka_container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire must already be configured (scripts/start_app.py does this).

    Args:
        container: DI container to use; the production container when omitted
    """
    settings = Settings()

    instrument_httpx()

    app_instance = FastAPI(
        title="ProTrack API",
        description="Tenant onboarding, invitations and user administration",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=sorted({settings.frontend_url, "http://localhost:3000"}),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_exception_handlers(app_instance)

    for router in ROUTERS:
        app_instance.include_router(router)

    return app_instance


# Module-level instance for uvicorn
app = create_app()

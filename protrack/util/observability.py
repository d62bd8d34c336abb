"""Logfire setup and instrumentation.

Services open spans named ``<service>.<operation>`` and attach ids as
attributes; invitation tokens only ever appear redacted. Bearer tokens and
invitation tokens are additionally scrubbed from anything exported.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from protrack.config import Settings

SERVICE_NAME = "protrack-api"
SERVICE_VERSION = "0.1.0"

# Attribute names scrubbed in addition to logfire's defaults
SCRUB_PATTERNS = ["invitation_token", "access_token", "service_role"]


def _send_to_logfire(settings: Settings) -> bool:
    # Explicit setting wins, then token presence
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for this process.

    Args:
        settings: Application settings
    """
    send = _send_to_logfire(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha if settings.git_sha != "unknown" else SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request, without headers (Authorization is a provider token)."""

    def _request_attributes(request, attributes):
        result = {**attributes, "path": request.url.path}
        if getattr(request, "method", None):
            result["method"] = request.method
        if request.client:
            result["client_host"] = request.client.host
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries on the async engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace calls to the identity provider."""
    logfire.instrument_httpx()

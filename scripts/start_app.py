#!/usr/bin/env python3
"""Serve the API with uvicorn once logging and Logfire are configured."""

import sys

import logfire
import uvicorn

from protrack.config import Settings
from protrack.util.logging import setup_logging
from protrack.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    # Logfire before the app module is imported, so instrumentation attaches
    configure_logfire(settings)
    setup_logging(settings)

    logfire.info(
        "Starting API",
        port=settings.port,
        git_sha=settings.git_sha,
        environment=settings.environment,
    )

    try:
        uvicorn.run(
            "protrack.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            log_config=None,
        )
    except Exception:
        logfire.exception("API startup failed")
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Stdlib logging bridge.

Application code logs through logfire directly. Libraries that use the
standard ``logging`` module (uvicorn, alembic, sqlalchemy, httpx) are routed
into logfire as well, so one console and one export carry everything.
"""

import logging

import logfire

from protrack.config import Settings

# Libraries that are chatty below WARNING
QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "asyncio")


def setup_logging(settings: Settings) -> None:
    """Send stdlib log records to logfire.

    Args:
        settings: Application settings; ``debug`` lowers the level to DEBUG
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        handlers=[logfire.LogfireLoggingHandler()],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("protrack").setLevel(level)

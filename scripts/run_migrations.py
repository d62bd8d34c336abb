#!/usr/bin/env python3
"""Apply (or roll back) database migrations.

    python scripts/run_migrations.py              # upgrade to head
    python scripts/run_migrations.py --to 3c1f2a9d7b40
    python scripts/run_migrations.py --downgrade base
"""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config

from protrack.config import Settings
from protrack.util.logging import setup_logging
from protrack.util.observability import configure_logfire


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--to", default="head", help="revision to upgrade to")
    target.add_argument("--downgrade", metavar="REVISION", help="revision to roll back to")
    parser.add_argument("--config", default="alembic.ini")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    settings = Settings()

    configure_logfire(settings)
    setup_logging(settings)

    alembic_cfg = Config(args.config)
    direction = "downgrade" if args.downgrade else "upgrade"
    revision = args.downgrade or args.to

    with logfire.span(
        "migrations.{direction}",
        direction=direction,
        revision=revision,
        environment=settings.environment,
    ):
        try:
            if args.downgrade:
                command.downgrade(alembic_cfg, revision)
            else:
                command.upgrade(alembic_cfg, revision)
        except Exception:
            # Fail the deploy step rather than start against a broken schema
            logfire.exception("Migration failed", revision=revision)
            raise

    logfire.info("Migrations applied", direction=direction, revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())

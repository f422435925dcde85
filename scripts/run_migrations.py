#!/usr/bin/env python3
"""Apply the engagement schema migrations with Logfire error tracking.

Usage:
    python scripts/run_migrations.py [revision]

The revision defaults to "head".
"""

import sys

import logfire
from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from engage.config import Settings
from engage.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade the database and log the outcome to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    revision = argv[1] if len(argv) > 1 else "head"
    database = make_url(settings.database_url)

    with logfire.span(
        "run_migrations",
        revision=revision,
        host=database.host,
        database=database.database,
    ):
        try:
            # migrations/env.py reads the URL from Settings
            command.upgrade(Config("alembic.ini"), revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy rather than start on a broken schema
            raise

        logfire.info("Database migrations completed", revision=revision)
        return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))

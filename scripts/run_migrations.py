#!/usr/bin/env python3
"""Apply or roll back the comment engine schema.

Usage:
    python scripts/run_migrations.py                # upgrade to head
    python scripts/run_migrations.py upgrade <rev>
    python scripts/run_migrations.py downgrade -1
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from discuss.config import Settings
from discuss.util.observability import configure_logfire

COMMANDS = {"upgrade": command.upgrade, "downgrade": command.downgrade}


def main(argv: list[str]) -> int:
    action = argv[0] if argv else "upgrade"
    revision = argv[1] if len(argv) > 1 else "head"
    if action not in COMMANDS:
        print(f"Unknown command {action!r}; expected one of {sorted(COMMANDS)}")
        return 2

    settings = Settings()
    configure_logfire(settings)

    with logfire.span(
        "migrations.{action}",
        action=action,
        revision=revision,
        environment=settings.environment,
    ):
        try:
            COMMANDS[action](Config("alembic.ini"), revision)
        except Exception:
            # Logged with traceback, then re-raised so a deploy stops here
            logfire.exception("Migration failed", action=action, revision=revision)
            raise

    logfire.info("Migrations finished", action=action, revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))

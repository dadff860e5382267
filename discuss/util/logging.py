"""Stdlib logging for alembic, asyncpg and the scripts.

Records from these libraries go to stdout and, once Logfire is configured,
into Logfire alongside the service spans.
"""

import logging
import sys

import logfire

from discuss.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Library loggers that flood INFO
NOISY_LOGGERS = ("asyncpg",)


def setup_logging(settings: Settings) -> None:
    """Route root logging to stdout and Logfire.

    Call after ``configure_logfire`` so the Logfire handler has somewhere to
    send records.
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    stdout = logging.StreamHandler(sys.stdout)
    stdout.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))

    logging.basicConfig(
        level=level,
        handlers=[stdout, logfire.LogfireLoggingHandler()],
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # Statement echo is handled by instrument_sqlalchemy
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging ready for %s at %s",
        settings.environment,
        logging.getLevelName(level),
    )

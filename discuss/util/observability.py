"""Logfire setup.

Services trace themselves directly:

    with logfire.span("vote_service.vote", comment_id=str(comment.id)):
        ...
        logfire.info("Vote cast", comment_id=str(comment.id), up=up)

This module only decides where those spans go.
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from discuss.config import ObservabilitySettings, Settings


def _send_to_logfire(observability: ObservabilitySettings) -> bool:
    # Explicit setting wins, then token presence; console-only otherwise
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return observability.logfire_token is not None


def _console(settings: Settings) -> logfire.ConsoleOptions | bool:
    # Test runs stay quiet; everything else prints nested spans
    if settings.environment == "test":
        return False
    return logfire.ConsoleOptions(
        colors="auto",
        span_style="show-parents",
        include_timestamps=True,
        verbose=settings.debug,
    )


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the process.

    Set OBSERVABILITY__LOGFIRE_TOKEN to ship traces to Logfire cloud, or
    OBSERVABILITY__SEND_TO_LOGFIRE to force the choice either way.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send = _send_to_logfire(observability)

    logfire.configure(
        service_name=observability.service_name,
        environment=settings.environment,
        send_to_logfire=send,
        token=observability.logfire_token,
        console=_console(settings),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every statement issued through the engine.

    Statements of one comment or vote transaction nest under the service
    span that issued them.
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)

"""Production container."""

from dishka import AsyncContainer, make_async_container

from discuss.config import Settings
from discuss.util.di import PROVIDERS, get_provider
from discuss.util.observability import configure_logfire


def create_container(settings: Settings | None = None) -> AsyncContainer:
    """Build the production container and configure Logfire.

    Usage:
        container = create_container()
        async with container() as request:
            use_case = await request.get(AddCommentUseCase)
            response = await use_case.execute(AddCommentRequest(...))
        await container.close()

    Args:
        settings: Settings to use; loaded from the environment when omitted
    """
    settings = settings or Settings()
    configure_logfire(settings)

    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, context={Settings: settings})

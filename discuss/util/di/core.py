"""Core DI providers (non-mockable)."""

from dishka import Scope, from_context, provide

from discuss.config import CommentSettings, Settings
from discuss.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Configuration provider - concrete, no mocks needed.

    Settings are handed to the container as context by whoever builds it,
    so production and tests load them the same way.
    """

    settings = from_context(provides=Settings, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        """Provide comment tree limits."""
        return settings.comments

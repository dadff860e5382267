"""Notification infrastructure providers."""

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from discuss.adapter.notification import DatabaseNotificationSink
from discuss.config import Settings
from discuss.domain.service import NotificationDispatcher, NotificationSink
from discuss.util.di.base import ProviderBase


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notification"
    __depends_on__ = {"persistence"}


class ProdNotificationProvider(NotificationProvider):
    """Production notification provider writing to the database."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_notification_sink(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> NotificationSink:
        """Provide database notification sink."""
        return DatabaseNotificationSink(session_factory)

    @provide(scope=Scope.APP)
    def get_notification_dispatcher(
        self, sink: NotificationSink, settings: Settings
    ) -> NotificationDispatcher:
        """Provide the process-wide notification dispatcher."""
        return NotificationDispatcher(sink, enabled=settings.notifications.enabled)

"""Database-backed notification sink."""

from typing import Any
from uuid import uuid4

import logfire
from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from discuss.adapter.error import NotificationDeliveryError
from discuss.domain.model import Comment, Post
from discuss.domain.service.notification_service import NotificationSink
from discuss.domain.value import NotificationType, UserId
from discuss.persistence.database import transactional_session
from discuss.persistence.tables import notifications_table


class DatabaseNotificationSink(NotificationSink):
    """Writes notifications to the notifications table.

    Each delivery opens its own session, since it runs after the request
    that triggered it may have finished.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def notify_reply(self, recipient_id: UserId, reply: Comment) -> None:
        await self._write(
            recipient_id,
            NotificationType.COMMENT_REPLY,
            {
                "comment_id": str(reply.id),
                "parent_id": str(reply.parent_id),
                "post_id": str(reply.post_id),
                "post_public_id": reply.post_public_id,
                "post_title": reply.post_title,
                "author_username": reply.author_username,
            },
        )

    async def notify_new_comment(self, post: Post, comment: Comment) -> None:
        await self._write(
            post.author_id,
            NotificationType.NEW_COMMENT,
            {
                "comment_id": str(comment.id),
                "post_id": str(post.id),
                "post_public_id": post.public_id,
                "post_title": post.title,
                "author_username": comment.author_username,
            },
        )

    async def notify_new_votes(self, recipient_id: UserId, comment: Comment) -> None:
        await self._write(
            recipient_id,
            NotificationType.NEW_VOTES,
            {
                "comment_id": str(comment.id),
                "post_public_id": comment.post_public_id,
                "community_name": comment.community_name,
            },
        )

    async def _write(
        self,
        recipient_id: UserId,
        kind: NotificationType,
        payload: dict[str, Any],
    ) -> None:
        stmt = insert(notifications_table).values(
            id=uuid4(),
            user_id=recipient_id,
            type=kind.value,
            payload=payload,
        )
        try:
            async with transactional_session(self.session_factory) as session:
                await session.execute(stmt)
        except SQLAlchemyError as e:
            raise NotificationDeliveryError(kind, recipient_id, str(e)) from e

        logfire.debug(
            "Notification stored",
            notification_type=kind.value,
            recipient_id=str(recipient_id),
        )

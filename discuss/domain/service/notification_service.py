"""Notification dispatch.

Notifications are side effects of a committed mutation. They run as
detached tasks: the caller never waits for them and a failing sink never
reaches the caller, it is only logged.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Coroutine
from typing import Any

import logfire

from discuss.domain.model.comment import Comment
from discuss.domain.model.post import Post
from discuss.domain.value import NotificationType, UserId

from .base import Service


class NotificationSink(ABC):
    """Destination for user notifications."""

    @abstractmethod
    async def notify_reply(self, recipient_id: UserId, reply: Comment) -> None:
        """Tell the parent's author about a reply."""
        pass

    @abstractmethod
    async def notify_new_comment(self, post: Post, comment: Comment) -> None:
        """Tell the post author about a new comment on their post."""
        pass

    @abstractmethod
    async def notify_new_votes(self, recipient_id: UserId, comment: Comment) -> None:
        """Tell the comment author their comment is collecting upvotes."""
        pass


class NotificationDispatcher(Service):
    """Decides who gets notified and fires the sink in the background."""

    def __init__(self, sink: NotificationSink, enabled: bool = True) -> None:
        """Initialize dispatcher.

        Args:
            sink: Where notifications are delivered
            enabled: When False every notification is skipped
        """
        self.sink = sink
        self.enabled = enabled
        # Strong references so pending tasks are not garbage collected
        self._pending: set[asyncio.Task[None]] = set()

    def comment_added(
        self, post: Post, comment: Comment, parent: Comment | None
    ) -> None:
        """Schedule notifications for a freshly committed comment.

        The parent's author hears about the reply unless they wrote it. The
        post author hears about the new comment unless they wrote it or
        already received the reply notification as the parent's author.
        """
        if not self.enabled:
            return

        if parent is not None and parent.author_id != comment.author_id:
            self._dispatch(
                NotificationType.COMMENT_REPLY,
                self.sink.notify_reply(parent.author_id, comment),
                comment_id=str(comment.id),
                recipient_id=str(parent.author_id),
            )

        if post.author_id == comment.author_id:
            return
        if parent is not None and parent.author_id == post.author_id:
            return
        self._dispatch(
            NotificationType.NEW_COMMENT,
            self.sink.notify_new_comment(post, comment),
            comment_id=str(comment.id),
            recipient_id=str(post.author_id),
        )

    def comment_upvoted(self, comment: Comment, voter_id: UserId) -> None:
        """Schedule the new-votes notification for an upvote by someone else."""
        if not self.enabled or comment.author_id is None:
            return
        if comment.author_id == voter_id:
            return
        self._dispatch(
            NotificationType.NEW_VOTES,
            self.sink.notify_new_votes(comment.author_id, comment),
            comment_id=str(comment.id),
            recipient_id=str(comment.author_id),
        )

    @property
    def pending(self) -> int:
        """Number of notifications still in flight."""
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for every in-flight notification to finish."""
        while self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def _dispatch(
        self,
        kind: NotificationType,
        delivery: Coroutine[Any, Any, None],
        **attributes: str,
    ) -> None:
        task = asyncio.create_task(self._deliver(kind, delivery, attributes))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(
        self,
        kind: NotificationType,
        delivery: Coroutine[Any, Any, None],
        attributes: dict[str, str],
    ) -> None:
        try:
            await delivery
        except Exception as e:
            logfire.error(
                "Notification delivery failed",
                notification_type=kind.value,
                error=str(e),
                error_type=type(e).__name__,
                **attributes,
            )
            return

        logfire.info(
            "Notification delivered",
            notification_type=kind.value,
            **attributes,
        )

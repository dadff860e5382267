"""Notification sink that keeps deliveries in memory."""

from dataclasses import dataclass

from discuss.domain.model import Comment, Post
from discuss.domain.service.notification_service import NotificationSink
from discuss.domain.value import CommentId, NotificationType, UserId


@dataclass(frozen=True)
class RecordedNotification:
    """A delivered notification."""

    type: NotificationType
    recipient_id: UserId
    comment_id: CommentId


class RecordingNotificationSink(NotificationSink):
    """Records notifications instead of delivering them.

    Set ``fail_with`` to make every delivery raise.
    """

    def __init__(self) -> None:
        self.delivered: list[RecordedNotification] = []
        self.fail_with: Exception | None = None

    async def notify_reply(self, recipient_id: UserId, reply: Comment) -> None:
        self._record(NotificationType.COMMENT_REPLY, recipient_id, reply.id)

    async def notify_new_comment(self, post: Post, comment: Comment) -> None:
        self._record(NotificationType.NEW_COMMENT, post.author_id, comment.id)

    async def notify_new_votes(self, recipient_id: UserId, comment: Comment) -> None:
        self._record(NotificationType.NEW_VOTES, recipient_id, comment.id)

    def of_type(self, kind: NotificationType) -> list[RecordedNotification]:
        """Deliveries of one kind, in delivery order."""
        return [n for n in self.delivered if n.type is kind]

    def _record(
        self, kind: NotificationType, recipient_id: UserId, comment_id: CommentId
    ) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.delivered.append(RecordedNotification(kind, recipient_id, comment_id))

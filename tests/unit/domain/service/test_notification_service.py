"""Unit tests for notification dispatch."""

import pytest

from discuss.adapter.notification import RecordingNotificationSink
from discuss.domain.repository import PostRepository, UserRepository
from discuss.domain.service import (
    CommentService,
    NotificationDispatcher,
    NotificationSink,
)
from discuss.domain.value import NotificationType
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def _thread(env):
    """Seed users op, alice and bob and a post written by op."""
    user_repo = await env.get(UserRepository)
    post_repo = await env.get(PostRepository)

    op = await user_repo.save(make_user("op"))
    alice = await user_repo.save(make_user("alice"))
    bob = await user_repo.save(make_user("bob"))
    post = await post_repo.save(make_post(op.id))
    return post, op, alice, bob


class TestCommentNotifications:
    """Who hears about a new comment."""

    @pytest.mark.asyncio
    async def test_top_level_comment_notifies_post_author(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        dispatcher = await unit_env.get(NotificationDispatcher)
        sink = await unit_env.get(NotificationSink)
        post, op, alice, _ = await _thread(unit_env)

        # Act
        comment = await comment_service.add_comment(post, alice, "hello op")
        await dispatcher.drain()

        # Assert
        [notification] = sink.delivered
        assert notification.type is NotificationType.NEW_COMMENT
        assert notification.recipient_id == op.id
        assert notification.comment_id == comment.id

    @pytest.mark.asyncio
    async def test_post_author_commenting_is_silent(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        dispatcher = await unit_env.get(NotificationDispatcher)
        sink = await unit_env.get(NotificationSink)
        post, op, _, _ = await _thread(unit_env)

        await comment_service.add_comment(post, op, "my own post")
        await dispatcher.drain()

        assert sink.delivered == []

    @pytest.mark.asyncio
    async def test_reply_notifies_parent_and_post_authors(self, unit_env):
        """Both the parent's author and the post's author hear about it."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        dispatcher = await unit_env.get(NotificationDispatcher)
        sink = await unit_env.get(NotificationSink)
        post, op, alice, bob = await _thread(unit_env)
        parent = await comment_service.add_comment(post, alice, "parent")
        await dispatcher.drain()
        sink.delivered.clear()

        # Act
        reply = await comment_service.add_comment(post, bob, "reply", parent.id)
        await dispatcher.drain()

        # Assert
        [reply_notification] = sink.of_type(NotificationType.COMMENT_REPLY)
        assert reply_notification.recipient_id == alice.id
        assert reply_notification.comment_id == reply.id
        [post_notification] = sink.of_type(NotificationType.NEW_COMMENT)
        assert post_notification.recipient_id == op.id

    @pytest.mark.asyncio
    async def test_reply_to_post_author_sends_one_notification(self, unit_env):
        """A post author who wrote the parent is notified once, as parent author."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        dispatcher = await unit_env.get(NotificationDispatcher)
        sink = await unit_env.get(NotificationSink)
        post, op, alice, _ = await _thread(unit_env)
        parent = await comment_service.add_comment(post, op, "op speaks")

        # Act
        await comment_service.add_comment(post, alice, "reply", parent.id)
        await dispatcher.drain()

        # Assert
        [notification] = sink.delivered
        assert notification.type is NotificationType.COMMENT_REPLY
        assert notification.recipient_id == op.id

    @pytest.mark.asyncio
    async def test_replying_to_yourself_is_silent_for_you(self, unit_env):
        """Self-replies only notify the post author."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        dispatcher = await unit_env.get(NotificationDispatcher)
        sink = await unit_env.get(NotificationSink)
        post, op, alice, _ = await _thread(unit_env)
        parent = await comment_service.add_comment(post, alice, "thought")
        await dispatcher.drain()
        sink.delivered.clear()

        # Act
        await comment_service.add_comment(post, alice, "second thought", parent.id)
        await dispatcher.drain()

        # Assert
        assert [n.recipient_id for n in sink.delivered] == [op.id]
        assert sink.of_type(NotificationType.COMMENT_REPLY) == []


class TestDeliveryFailures:
    """Notification failures never reach the caller."""

    @pytest.mark.asyncio
    async def test_failing_sink_does_not_fail_comment(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        dispatcher = await unit_env.get(NotificationDispatcher)
        sink = await unit_env.get(NotificationSink)
        post, _, alice, _ = await _thread(unit_env)
        sink.fail_with = RuntimeError("mail server down")

        # Act
        comment = await comment_service.add_comment(post, alice, "still posted")
        await dispatcher.drain()

        # Assert
        assert comment.body == "still posted"
        assert sink.delivered == []
        assert dispatcher.pending == 0

    @pytest.mark.asyncio
    async def test_disabled_dispatcher_sends_nothing(self, unit_env):
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        post_repo = await unit_env.get(PostRepository)
        sink = RecordingNotificationSink()
        dispatcher = NotificationDispatcher(sink, enabled=False)
        op = await user_repo.save(make_user("op"))
        post = await post_repo.save(make_post(op.id))
        comment_service = await unit_env.get(CommentService)
        comment_service.notifications = dispatcher
        alice = await user_repo.save(make_user("alice"))

        # Act
        comment = await comment_service.add_comment(post, alice, "quiet")
        dispatcher.comment_upvoted(comment, op.id)
        await dispatcher.drain()

        # Assert
        assert dispatcher.pending == 0
        assert sink.delivered == []

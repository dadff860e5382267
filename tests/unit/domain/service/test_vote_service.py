"""Unit tests for VoteService."""

import asyncio
from uuid import uuid4

import pytest

from discuss.domain.error import (
    AlreadyVotedError,
    ContentDeletedException,
    NotFoundError,
    PostLockedError,
)
from discuss.domain.model.comment import Comment
from discuss.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from discuss.domain.service import (
    CommentService,
    NotificationDispatcher,
    NotificationSink,
    VoteService,
)
from discuss.domain.value import AuthorityTier, NotificationType, UserId
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def _comment(env) -> Comment:
    """Seed a post with one comment by "author"."""
    comment_service = await env.get(CommentService)
    user_repo = await env.get(UserRepository)
    post_repo = await env.get(PostRepository)

    author = await user_repo.save(make_user("author"))
    post = await post_repo.save(make_post(author.id))
    return await comment_service.add_comment(post, author, "vote on me")


async def _voter(env, username: str = "voter") -> UserId:
    user_repo = await env.get(UserRepository)
    return (await user_repo.save(make_user(username))).id


def _tally(comment: Comment) -> tuple[int, int, int]:
    return comment.upvotes, comment.downvotes, comment.points


class TestVote:
    """Tests for casting votes."""

    @pytest.mark.asyncio
    async def test_upvote(self, unit_env):
        """An upvote moves upvotes and points by one."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await _comment(unit_env)
        voter_id = await _voter(unit_env)

        # Act
        voted = await vote_service.vote(comment, voter_id, up=True)

        # Assert
        assert _tally(voted) == (1, 0, 1)
        assert voted.viewer_voted is True
        assert voted.viewer_voted_up is True
        assert _tally(await comment_repo.find_by_id(comment.id)) == (1, 0, 1)

    @pytest.mark.asyncio
    async def test_downvote(self, unit_env):
        """A downvote moves downvotes up and points down."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await _comment(unit_env)
        voter_id = await _voter(unit_env)

        # Act
        voted = await vote_service.vote(comment, voter_id, up=False)

        # Assert
        assert _tally(voted) == (0, 1, -1)
        assert voted.viewer_voted_up is False
        assert _tally(await comment_repo.find_by_id(comment.id)) == (0, 1, -1)

    @pytest.mark.asyncio
    async def test_vote_is_recorded(self, unit_env):
        """One vote row per (comment, user)."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        comment = await _comment(unit_env)
        voter_id = await _voter(unit_env)

        await vote_service.vote(comment, voter_id, up=True)

        vote = await vote_repo.find(comment.id, voter_id)
        assert vote is not None
        assert vote.up is True

    @pytest.mark.asyncio
    async def test_duplicate_vote_rejected_and_tallies_unchanged(self, unit_env):
        """A second vote by the same user fails without touching tallies."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await _comment(unit_env)
        voter_id = await _voter(unit_env)
        await vote_service.vote(comment, voter_id, up=True)

        # Act & Assert
        with pytest.raises(AlreadyVotedError) as exc_info:
            await vote_service.vote(comment, voter_id, up=False)
        assert exc_info.value.code == "already-voted"
        assert _tally(await comment_repo.find_by_id(comment.id)) == (1, 0, 1)

    @pytest.mark.asyncio
    async def test_vote_on_locked_post_rejected(self, unit_env):
        """Locked posts accept no votes."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        comment = await _comment(unit_env)
        voter_id = await _voter(unit_env)
        post = await post_repo.find_by_id(comment.post_id)
        await post_repo.save(post.model_copy(update={"locked_at": post.created_at}))

        # Act & Assert
        with pytest.raises(PostLockedError):
            await vote_service.vote(comment, voter_id, up=True)

    @pytest.mark.asyncio
    async def test_stale_copy_of_deleted_comment_rolls_back(self, unit_env):
        """A comment deleted after it was read refuses the vote and keeps no row."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_service = await unit_env.get(CommentService)
        vote_repo = await unit_env.get(VoteRepository)
        comment = await _comment(unit_env)
        voter_id = await _voter(unit_env)
        await comment_service.delete_comment(
            comment, comment.author_id, AuthorityTier.SELF
        )

        # Act - `comment` still looks active
        with pytest.raises(ContentDeletedException):
            await vote_service.vote(comment, voter_id, up=True)

        # Assert
        assert await vote_repo.find(comment.id, voter_id) is None

    @pytest.mark.asyncio
    async def test_concurrent_votes_all_counted(self, unit_env):
        """N concurrent upvotes by distinct users give exactly N."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await _comment(unit_env)
        voters = [await _voter(unit_env, f"voter{i}") for i in range(10)]

        # Act
        await asyncio.gather(
            *(vote_service.vote(comment, voter_id, up=True) for voter_id in voters)
        )

        # Assert
        assert _tally(await comment_repo.find_by_id(comment.id)) == (10, 0, 10)

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_votes_count_once(self, unit_env):
        """Racing votes by one user: one wins, the rest are duplicates."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await _comment(unit_env)
        voter_id = await _voter(unit_env)

        # Act
        results = await asyncio.gather(
            *(vote_service.vote(comment, voter_id, up=True) for _ in range(5)),
            return_exceptions=True,
        )

        # Assert
        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 4
        assert all(isinstance(f, AlreadyVotedError) for f in failures)
        assert _tally(await comment_repo.find_by_id(comment.id)) == (1, 0, 1)


class TestDeleteVote:
    """Tests for retracting votes."""

    @pytest.mark.asyncio
    async def test_delete_upvote_restores_tallies(self, unit_env):
        """Retracting reverses the vote's effect."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        vote_repo = await unit_env.get(VoteRepository)
        comment = await _comment(unit_env)
        voter_id = await _voter(unit_env)
        voted = await vote_service.vote(comment, voter_id, up=True)

        # Act
        removed = await vote_service.delete_vote(voted, voter_id)

        # Assert
        assert _tally(removed) == (0, 0, 0)
        assert removed.viewer_voted is False
        assert removed.viewer_voted_up is None
        assert _tally(await comment_repo.find_by_id(comment.id)) == (0, 0, 0)
        assert await vote_repo.find(comment.id, voter_id) is None

    @pytest.mark.asyncio
    async def test_delete_downvote_restores_tallies(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await _comment(unit_env)
        voter_id = await _voter(unit_env)
        await vote_service.vote(comment, voter_id, up=False)

        await vote_service.delete_vote(comment, voter_id)

        assert _tally(await comment_repo.find_by_id(comment.id)) == (0, 0, 0)

    @pytest.mark.asyncio
    async def test_delete_without_vote_raises_not_found(self, unit_env):
        """There is nothing to retract."""
        vote_service = await unit_env.get(VoteService)
        comment = await _comment(unit_env)

        with pytest.raises(NotFoundError):
            await vote_service.delete_vote(comment, UserId(uuid4()))


class TestChangeVote:
    """Tests for flipping votes."""

    @pytest.mark.asyncio
    async def test_flip_up_to_down(self, unit_env):
        """Up then down gives 0 up, 1 down, -1 points."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        vote_repo = await unit_env.get(VoteRepository)
        comment = await _comment(unit_env)
        voter_id = await _voter(unit_env)
        await vote_service.vote(comment, voter_id, up=True)

        # Act
        changed = await vote_service.change_vote(comment, voter_id, up=False)

        # Assert
        assert changed.viewer_voted_up is False
        assert _tally(await comment_repo.find_by_id(comment.id)) == (0, 1, -1)
        assert (await vote_repo.find(comment.id, voter_id)).up is False

    @pytest.mark.asyncio
    async def test_flip_down_to_up(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await _comment(unit_env)
        voter_id = await _voter(unit_env)
        await vote_service.vote(comment, voter_id, up=False)

        await vote_service.change_vote(comment, voter_id, up=True)

        assert _tally(await comment_repo.find_by_id(comment.id)) == (1, 0, 1)

    @pytest.mark.asyncio
    async def test_same_direction_is_noop(self, unit_env):
        """Changing to the current direction leaves everything alone."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)
        comment = await _comment(unit_env)
        voter_id = await _voter(unit_env)
        await vote_service.vote(comment, voter_id, up=True)

        # Act
        await vote_service.change_vote(comment, voter_id, up=True)

        # Assert
        assert _tally(await comment_repo.find_by_id(comment.id)) == (1, 0, 1)
        assert (await user_repo.find_by_id(comment.author_id)).points == 1

    @pytest.mark.asyncio
    async def test_change_without_vote_raises_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        comment = await _comment(unit_env)

        with pytest.raises(NotFoundError):
            await vote_service.change_vote(comment, UserId(uuid4()), up=False)


class TestReputation:
    """Author reputation follows upvotes."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "up, expected",
        [(True, 1), (False, 0)],
    )
    async def test_vote_reputation(self, unit_env, up, expected):
        """Upvotes earn a point; downvotes cost nothing."""
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        comment = await _comment(unit_env)

        await vote_service.vote(comment, await _voter(unit_env), up=up)

        assert (await user_repo.find_by_id(comment.author_id)).points == expected

    @pytest.mark.asyncio
    async def test_retract_and_flip_reputation(self, unit_env):
        """Retracting or flipping an upvote gives the point back."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        comment = await _comment(unit_env)
        first = await _voter(unit_env, "first")
        second = await _voter(unit_env, "second")

        async def author_points() -> int:
            return (await user_repo.find_by_id(comment.author_id)).points

        # Act & Assert
        await vote_service.vote(comment, first, up=True)
        await vote_service.vote(comment, second, up=True)
        assert await author_points() == 2

        await vote_service.change_vote(comment, first, up=False)
        assert await author_points() == 1

        await vote_service.delete_vote(comment, second)
        assert await author_points() == 0

        await vote_service.change_vote(comment, first, up=True)
        assert await author_points() == 1

    @pytest.mark.asyncio
    async def test_self_vote_earns_nothing(self, unit_env):
        """Voting on your own comment is counted but earns no reputation."""
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        comment = await _comment(unit_env)

        voted = await vote_service.vote(comment, comment.author_id, up=True)

        assert voted.upvotes == 1
        assert (await user_repo.find_by_id(comment.author_id)).points == 0

    @pytest.mark.asyncio
    async def test_reputation_failure_does_not_undo_vote(
        self, unit_env, monkeypatch
    ):
        """The vote stands when the reputation update fails."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        vote_repo = await unit_env.get(VoteRepository)
        user_repo = await unit_env.get(UserRepository)
        comment = await _comment(unit_env)
        voter_id = await _voter(unit_env)

        async def broken(user_id: UserId, delta: int) -> None:
            raise RuntimeError("users table locked")

        monkeypatch.setattr(user_repo, "adjust_points", broken)

        # Act
        voted = await vote_service.vote(comment, voter_id, up=True)

        # Assert
        assert voted.upvotes == 1
        assert _tally(await comment_repo.find_by_id(comment.id)) == (1, 0, 1)
        assert await vote_repo.find(comment.id, voter_id) is not None
        assert (await user_repo.find_by_id(comment.author_id)).points == 0


class TestVoteNotifications:
    """New-votes notifications."""

    @pytest.mark.asyncio
    async def test_upvote_notifies_author(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        dispatcher = await unit_env.get(NotificationDispatcher)
        sink = await unit_env.get(NotificationSink)
        comment = await _comment(unit_env)

        # Act
        await vote_service.vote(comment, await _voter(unit_env), up=True)
        await dispatcher.drain()

        # Assert
        [notification] = sink.of_type(NotificationType.NEW_VOTES)
        assert notification.recipient_id == comment.author_id
        assert notification.comment_id == comment.id

    @pytest.mark.asyncio
    async def test_downvotes_and_self_votes_are_silent(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        dispatcher = await unit_env.get(NotificationDispatcher)
        sink = await unit_env.get(NotificationSink)
        comment = await _comment(unit_env)

        # Act
        await vote_service.vote(comment, await _voter(unit_env), up=False)
        await vote_service.vote(comment, comment.author_id, up=True)
        await dispatcher.drain()

        # Assert
        assert sink.of_type(NotificationType.NEW_VOTES) == []

"""Vote domain service."""

from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from discuss.domain.error import (
    AlreadyVotedError,
    ContentDeletedException,
    NotFoundError,
    PostLockedError,
)
from discuss.domain.model.comment import Comment
from discuss.domain.model.vote import Vote
from discuss.domain.repository import (
    UNIQUE_VOTE_CONSTRAINT,
    CommentRepository,
    PostRepository,
    TransactionManager,
    UserRepository,
    VoteRepository,
)
from discuss.domain.value import TallyDelta, UserId, VoteId

from .base import Service
from .notification_service import NotificationDispatcher


def is_duplicate_vote(error: IntegrityError) -> bool:
    """Whether an integrity error comes from the one-vote-per-user constraint."""
    return UNIQUE_VOTE_CONSTRAINT in str(error)


class VoteService(Service):
    """Domain service for vote operations.

    The vote row, the comment tallies and the author's reputation change
    in one transaction. Reputation is best effort: it runs in a savepoint
    and a failure there is logged without undoing the vote.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        user_repository: UserRepository,
        transactions: TransactionManager,
        notifications: NotificationDispatcher,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            comment_repository: Comment repository (tallies)
            post_repository: Post repository (lock state)
            user_repository: User repository (reputation)
            transactions: Transaction manager shared with the repositories
            notifications: Dispatcher for post-commit notifications
        """
        self.vote_repository = vote_repository
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.user_repository = user_repository
        self.transactions = transactions
        self.notifications = notifications

    async def vote(self, comment: Comment, user_id: UserId, up: bool) -> Comment:
        """Cast a vote on a comment.

        Args:
            comment: Comment being voted on
            user_id: Voter
            up: True for an upvote, False for a downvote

        Returns:
            Copy of the comment with updated tallies and viewer flags

        Raises:
            ContentDeletedException: If the comment is deleted
            PostLockedError: If the post is locked
            AlreadyVotedError: If the user already voted on the comment
        """
        with logfire.span(
            "vote_service.vote",
            comment_id=str(comment.id),
            user_id=str(user_id),
            up=up,
        ):
            await self._ensure_votable(comment)

            delta = TallyDelta.cast(up)
            vote = Vote(
                id=VoteId(uuid4()),
                comment_id=comment.id,
                user_id=user_id,
                up=up,
            )

            try:
                async with self.transactions.transaction():
                    await self.vote_repository.save(vote)
                    await self._apply_tally(comment, delta)
                    await self._adjust_reputation(comment, user_id, delta)
            except IntegrityError as e:
                if not is_duplicate_vote(e):
                    raise
                logfire.warn(
                    "Duplicate vote attempt",
                    user_id=str(user_id),
                    comment_id=str(comment.id),
                )
                raise AlreadyVotedError(str(comment.id), str(user_id)) from e

            logfire.info(
                "Vote cast",
                comment_id=str(comment.id),
                user_id=str(user_id),
                up=up,
            )

            if up:
                self.notifications.comment_upvoted(comment, user_id)

            return comment.with_tally(delta).model_copy(
                update={"viewer_voted": True, "viewer_voted_up": up}
            )

    async def delete_vote(self, comment: Comment, user_id: UserId) -> Comment:
        """Retract the user's vote on a comment.

        Raises:
            ContentDeletedException: If the comment is deleted
            PostLockedError: If the post is locked
            NotFoundError: If the user has no vote on the comment
        """
        with logfire.span(
            "vote_service.delete_vote",
            comment_id=str(comment.id),
            user_id=str(user_id),
        ):
            await self._ensure_votable(comment)
            existing = await self._find_vote(comment, user_id)

            delta = TallyDelta.retract(existing.up)
            async with self.transactions.transaction():
                if not await self.vote_repository.delete(existing.id):
                    # Retracted concurrently
                    raise NotFoundError("Vote", f"{comment.id}/{user_id}")
                await self._apply_tally(comment, delta)
                await self._adjust_reputation(comment, user_id, delta)

            logfire.info(
                "Vote removed",
                comment_id=str(comment.id),
                user_id=str(user_id),
                up=existing.up,
            )
            return comment.with_tally(delta).model_copy(
                update={"viewer_voted": False, "viewer_voted_up": None}
            )

    async def change_vote(
        self, comment: Comment, user_id: UserId, up: bool
    ) -> Comment:
        """Flip the direction of the user's vote.

        Asking for the direction the vote already has is a no-op.

        Raises:
            ContentDeletedException: If the comment is deleted
            PostLockedError: If the post is locked
            NotFoundError: If the user has no vote on the comment
        """
        with logfire.span(
            "vote_service.change_vote",
            comment_id=str(comment.id),
            user_id=str(user_id),
            up=up,
        ):
            await self._ensure_votable(comment)
            existing = await self._find_vote(comment, user_id)
            if existing.up == up:
                return comment.model_copy(
                    update={"viewer_voted": True, "viewer_voted_up": up}
                )

            delta = TallyDelta.flip(existing.up)
            async with self.transactions.transaction():
                if not await self.vote_repository.set_direction(existing.id, up):
                    raise NotFoundError("Vote", f"{comment.id}/{user_id}")
                await self._apply_tally(comment, delta)
                await self._adjust_reputation(comment, user_id, delta)

            logfire.info(
                "Vote changed",
                comment_id=str(comment.id),
                user_id=str(user_id),
                up=up,
            )
            return comment.with_tally(delta).model_copy(
                update={"viewer_voted": True, "viewer_voted_up": up}
            )

    async def _ensure_votable(self, comment: Comment) -> None:
        if comment.is_deleted:
            raise ContentDeletedException("comment", str(comment.id))
        if await self.post_repository.is_locked(comment.post_id):
            logfire.warn(
                "Vote rejected on locked post",
                post_id=str(comment.post_id),
                comment_id=str(comment.id),
            )
            raise PostLockedError(str(comment.post_id))

    async def _find_vote(self, comment: Comment, user_id: UserId) -> Vote:
        existing = await self.vote_repository.find(comment.id, user_id)
        if existing is None:
            raise NotFoundError("Vote", f"{comment.id}/{user_id}")
        return existing

    async def _apply_tally(self, comment: Comment, delta: TallyDelta) -> None:
        # Guarded on deleted_at, so a concurrent delete aborts the vote
        if not await self.comment_repository.apply_tally(comment.id, delta):
            raise ContentDeletedException("comment", str(comment.id))

    async def _adjust_reputation(
        self, comment: Comment, voter_id: UserId, delta: TallyDelta
    ) -> None:
        if comment.author_id is None or comment.author_id == voter_id:
            return
        if delta.reputation == 0:
            return

        try:
            async with self.transactions.savepoint():
                await self.user_repository.adjust_points(
                    comment.author_id, delta.reputation
                )
        except Exception as e:
            logfire.error(
                "Failed to adjust author reputation",
                comment_id=str(comment.id),
                author_id=str(comment.author_id),
                delta=delta.reputation,
                error=str(e),
                error_type=type(e).__name__,
            )

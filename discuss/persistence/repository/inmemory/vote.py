"""In-memory vote repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from discuss.domain.model.vote import Vote
from discuss.domain.repository.vote import UNIQUE_VOTE_CONSTRAINT, VoteRepository
from discuss.domain.value import CommentId, UserId, VoteId

from .database import InMemoryDatabase


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find(self, comment_id: CommentId, user_id: UserId) -> Optional[Vote]:
        """Find a user's vote on a comment."""
        for vote in self.database.votes.values():
            if vote.comment_id == comment_id and vote.user_id == user_id:
                return vote
        return None

    async def find_by_comment(self, comment_id: CommentId) -> list[Vote]:
        """Find all votes on a comment."""
        votes = [v for v in self.database.votes.values() if v.comment_id == comment_id]
        return sorted(votes, key=lambda v: v.created_at)

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If the user already voted on the comment
        """
        if await self.find(vote.comment_id, vote.user_id):
            raise IntegrityError(
                f'duplicate key value violates unique constraint "{UNIQUE_VOTE_CONSTRAINT}"',
                None,
                Exception("duplicate vote"),
            )

        self.database.votes[vote.id] = vote
        return vote

    async def set_direction(self, vote_id: VoteId, up: bool) -> bool:
        """Flip a vote in place."""
        vote = self.database.votes.get(vote_id)
        if vote is None:
            return False
        self.database.votes[vote_id] = vote.model_copy(update={"up": up})
        return True

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote by ID."""
        return self.database.votes.pop(vote_id, None) is not None

"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from discuss.domain.model.vote import Vote
from discuss.domain.value import CommentId, UserId, VoteId

# Name of the (comment_id, user_id) unique constraint. Implementations must
# raise sqlalchemy's IntegrityError mentioning it on duplicate inserts.
UNIQUE_VOTE_CONSTRAINT = "uq_comment_votes_comment_user"


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find(self, comment_id: CommentId, user_id: UserId) -> Optional[Vote]:
        """Find a user's vote on a comment.

        Args:
            comment_id: The comment ID
            user_id: The voter's ID

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_comment(self, comment_id: CommentId) -> List[Vote]:
        """Find all votes on a comment."""
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a vote.

        Raises:
            IntegrityError: If the user already voted on the comment
                (unique constraint ``UNIQUE_VOTE_CONSTRAINT``)
        """
        pass

    @abstractmethod
    async def set_direction(self, vote_id: VoteId, up: bool) -> bool:
        """Flip a vote in place.

        Returns:
            True if the vote existed
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote.

        Returns:
            True if a vote was deleted, False if no vote existed
        """
        pass

"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from discuss.domain.model.comment import Comment
from discuss.domain.value import (
    AuthorityTier,
    CommentFilter,
    CommentId,
    TallyDelta,
    UserId,
)


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.

    Every mutating method other than ``insert`` only touches active comments
    (``deleted_at IS NULL``) and reports whether a row was changed, so a
    concurrent delete can never be overwritten.
    """

    @abstractmethod
    async def find_by_id(
        self, comment_id: CommentId, viewer_id: Optional[UserId] = None
    ) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier
            viewer_id: When given, the viewer's vote is joined in
                (``viewer_voted`` / ``viewer_voted_up``)

        Returns:
            The raw (unredacted) comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find(
        self, comment_filter: CommentFilter, viewer_id: Optional[UserId] = None
    ) -> List[Comment]:
        """Find comments matching a filter, oldest first.

        Args:
            comment_filter: Query criteria
            viewer_id: When given, the viewer's vote is joined in

        Returns:
            Raw (unredacted) comments
        """
        pass

    @abstractmethod
    async def insert(self, comment: Comment) -> None:
        """Insert a new comment row."""
        pass

    @abstractmethod
    async def increment_direct_replies(self, parent_id: CommentId) -> bool:
        """Add one to an active parent's direct reply counter.

        Returns:
            True if a row was updated, False if missing or deleted
        """
        pass

    @abstractmethod
    async def increment_replies(self, ancestor_ids: Sequence[CommentId]) -> None:
        """Add one to the total reply counter of every ancestor."""
        pass

    @abstractmethod
    async def add_reply_edges(
        self, ancestor_ids: Sequence[CommentId], reply_id: CommentId
    ) -> None:
        """Record an (ancestor, reply) edge for every ancestor."""
        pass

    @abstractmethod
    async def index_activity(self, author_id: UserId, comment_id: CommentId) -> None:
        """Register the comment in the author's profile activity."""
        pass

    @abstractmethod
    async def unindex_activity(
        self, author_id: UserId, comment_id: CommentId
    ) -> None:
        """Remove the comment from the author's profile activity."""
        pass

    @abstractmethod
    async def update_body(
        self, comment_id: CommentId, body: str, edited_at: datetime
    ) -> bool:
        """Replace the body of an active comment.

        Returns:
            True if a row was updated, False if missing or deleted
        """
        pass

    @abstractmethod
    async def update_posted_as(
        self, comment_id: CommentId, posted_as: AuthorityTier
    ) -> bool:
        """Change the tier an active comment is presented under.

        Returns:
            True if a row was updated, False if missing or deleted
        """
        pass

    @abstractmethod
    async def mark_deleted(
        self,
        comment_id: CommentId,
        deleted_at: datetime,
        deleted_by: UserId,
        deleted_as: AuthorityTier,
    ) -> bool:
        """Soft delete an active comment and clear its body.

        Returns:
            True if a row was updated, False if missing or already deleted
        """
        pass

    @abstractmethod
    async def apply_tally(self, comment_id: CommentId, delta: TallyDelta) -> bool:
        """Atomically apply a vote delta to an active comment.

        Returns:
            True if a row was updated, False if missing or deleted
        """
        pass

"""Comment entity.

Comments form a forest under each post. Every comment stores its full
ancestor path (root first, immediate parent last) so that ancestor counter
fan-out and subtree queries never need a recursive traversal.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel, utcnow
from discuss.domain.model.user import User
from discuss.domain.value import (
    AuthorityTier,
    CommentId,
    CommunityId,
    PostId,
    TallyDelta,
    UserId,
)

DELETED_BODY = "[Deleted comment]"
HIDDEN_USERNAME = "Hidden"


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - depth: Nesting level (0 for top-level, parent depth + 1 for replies)
    - ancestors: Ids from the root down to the parent (empty for top-level)

    Deleted comments keep their place in the tree. Their content and
    authorship are hidden by ``redacted()`` while ids and counters survive.
    """

    id: CommentId
    post_id: PostId
    community_id: CommunityId
    author_id: Optional[UserId]  # None once redacted
    author_username: str
    # The author account was deleted; the comment itself may still be active
    author_deleted: bool = False
    posted_as: Optional[AuthorityTier] = AuthorityTier.SELF
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    ancestors: list[CommentId] = Field(default_factory=list)
    body: str = ""

    # Denormalized snapshots taken at creation time
    post_public_id: str
    post_title: str
    community_name: str

    # Tallies
    reply_count: int = Field(default=0, ge=0)
    direct_reply_count: int = Field(default=0, ge=0)
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    points: int = 0

    created_at: datetime = Field(default_factory=utcnow)
    edited_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[UserId] = None
    deleted_as: Optional[AuthorityTier] = None

    # Read from the post at query time, never persisted
    post_deleted: bool = False
    post_deleted_as: Optional[AuthorityTier] = None

    # Viewer projection, never persisted
    author: Optional[User] = None
    is_author_muted: bool = False
    viewer_voted: Optional[bool] = None
    viewer_voted_up: Optional[bool] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def child_path(self) -> list[CommentId]:
        """Ancestor path for a direct reply to this comment."""
        return [*self.ancestors, self.id]

    def with_tally(self, delta: TallyDelta) -> "Comment":
        """Copy with the vote delta applied to the counters."""
        return self.model_copy(
            update={
                "upvotes": self.upvotes + delta.upvotes,
                "downvotes": self.downvotes + delta.downvotes,
                "points": self.points + delta.points,
            }
        )

    def redacted(self) -> "Comment":
        """Copy safe to show to anyone.

        Active comments are returned unchanged.
        """
        if not self.is_deleted:
            return self
        return self.model_copy(
            update={
                "author_id": None,
                "author_username": HIDDEN_USERNAME,
                "posted_as": None,
                "body": DELETED_BODY,
                "author": None,
                "viewer_voted": None,
                "viewer_voted_up": None,
            }
        )

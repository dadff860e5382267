"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from discuss.domain.model.comment import Comment
from discuss.domain.repository.comment import CommentRepository
from discuss.domain.value import (
    AuthorityTier,
    CommentFilter,
    CommentId,
    TallyDelta,
    UserId,
)

from .database import InMemoryDatabase


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    def _project(self, comment: Comment, viewer_id: Optional[UserId]) -> Comment:
        post = self.database.posts.get(comment.post_id)
        changes = {
            "post_deleted": post is not None and post.is_deleted,
            "post_deleted_as": post.deleted_as if post is not None else None,
        }
        if viewer_id is not None:
            vote = next(
                (
                    v
                    for v in self.database.votes.values()
                    if v.comment_id == comment.id and v.user_id == viewer_id
                ),
                None,
            )
            changes["viewer_voted"] = vote is not None
            changes["viewer_voted_up"] = vote.up if vote else None
        return comment.model_copy(update=changes)

    def _active(self, comment_id: CommentId) -> Optional[Comment]:
        comment = self.database.comments.get(comment_id)
        if comment is None or comment.is_deleted:
            return None
        return comment

    def _update(self, comment: Comment, **changes) -> None:
        self.database.comments[comment.id] = comment.model_copy(update=changes)

    async def find_by_id(
        self, comment_id: CommentId, viewer_id: Optional[UserId] = None
    ) -> Optional[Comment]:
        """Find a comment by ID."""
        comment = self.database.comments.get(comment_id)
        return self._project(comment, viewer_id) if comment else None

    async def find(
        self, comment_filter: CommentFilter, viewer_id: Optional[UserId] = None
    ) -> list[Comment]:
        """Find comments matching a filter, oldest first."""
        f = comment_filter
        comments = list(self.database.comments.values())

        if f.ids is not None:
            wanted = set(f.ids)
            comments = [c for c in comments if c.id in wanted]
        if f.post_id is not None:
            comments = [c for c in comments if c.post_id == f.post_id]
        if f.author_id is not None:
            comments = [c for c in comments if c.author_id == f.author_id]
        if f.parent_id is not None:
            comments = [c for c in comments if c.parent_id == f.parent_id]
        if f.top_level_only:
            comments = [c for c in comments if c.parent_id is None]
        if f.descendants_of is not None:
            descendants = {
                reply
                for ancestor, reply in self.database.reply_edges
                if ancestor == f.descendants_of
            }
            comments = [c for c in comments if c.id in descendants]
        if not f.include_deleted:
            comments = [c for c in comments if not c.is_deleted]

        comments.sort(key=lambda c: (c.created_at, str(c.id)))

        end = f.offset + f.limit if f.limit is not None else None
        return [self._project(c, viewer_id) for c in comments[f.offset : end]]

    async def insert(self, comment: Comment) -> None:
        """Insert a new comment."""
        self.database.comments[comment.id] = comment

    async def increment_direct_replies(self, parent_id: CommentId) -> bool:
        """Add one to an active parent's direct reply counter."""
        parent = self._active(parent_id)
        if parent is None:
            return False
        self._update(parent, direct_reply_count=parent.direct_reply_count + 1)
        return True

    async def increment_replies(self, ancestor_ids: Sequence[CommentId]) -> None:
        """Add one to every ancestor's total reply counter."""
        for ancestor_id in ancestor_ids:
            ancestor = self.database.comments.get(ancestor_id)
            if ancestor is not None:
                self._update(ancestor, reply_count=ancestor.reply_count + 1)

    async def add_reply_edges(
        self, ancestor_ids: Sequence[CommentId], reply_id: CommentId
    ) -> None:
        """Record an (ancestor, reply) edge for every ancestor."""
        for ancestor_id in ancestor_ids:
            self.database.reply_edges.add((ancestor_id, reply_id))

    async def index_activity(self, author_id: UserId, comment_id: CommentId) -> None:
        """Register the comment in the author's profile activity."""
        self.database.activity[comment_id] = author_id

    async def unindex_activity(
        self, author_id: UserId, comment_id: CommentId
    ) -> None:
        """Remove the comment from the author's profile activity."""
        if self.database.activity.get(comment_id) == author_id:
            del self.database.activity[comment_id]

    async def update_body(
        self, comment_id: CommentId, body: str, edited_at: datetime
    ) -> bool:
        """Replace the body of an active comment."""
        comment = self._active(comment_id)
        if comment is None:
            return False
        self._update(comment, body=body, edited_at=edited_at)
        return True

    async def update_posted_as(
        self, comment_id: CommentId, posted_as: AuthorityTier
    ) -> bool:
        """Change the tier an active comment is presented under."""
        comment = self._active(comment_id)
        if comment is None:
            return False
        self._update(comment, posted_as=posted_as)
        return True

    async def mark_deleted(
        self,
        comment_id: CommentId,
        deleted_at: datetime,
        deleted_by: UserId,
        deleted_as: AuthorityTier,
    ) -> bool:
        """Soft delete an active comment and clear its body."""
        comment = self._active(comment_id)
        if comment is None:
            return False
        self._update(
            comment,
            body="",
            deleted_at=deleted_at,
            deleted_by=deleted_by,
            deleted_as=deleted_as,
        )
        return True

    async def apply_tally(self, comment_id: CommentId, delta: TallyDelta) -> bool:
        """Apply a vote delta to an active comment."""
        comment = self._active(comment_id)
        if comment is None:
            return False
        self.database.comments[comment_id] = comment.with_tally(delta)
        return True

"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import Select, and_, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import Comment
from discuss.domain.repository import CommentRepository
from discuss.domain.value import (
    AuthorityTier,
    CommentFilter,
    CommentId,
    TallyDelta,
    UserId,
)
from discuss.persistence.mappers import comment_to_dict, row_to_comment
from discuss.persistence.tables import (
    ACTIVITY_TYPE_COMMENT,
    activity_table,
    comment_replies_table,
    comment_votes_table,
    comments_table,
    posts_table,
)


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _select(self, viewer_id: Optional[UserId]) -> Select:
        """Base comment query.

        The post's deletion state is always joined in; the viewer's vote is
        outer-joined when a viewer is given.
        """
        columns = [
            comments_table,
            posts_table.c.deleted_at.is_not(None).label("post_deleted"),
            posts_table.c.deleted_as.label("post_deleted_as"),
        ]
        source = comments_table.join(
            posts_table, posts_table.c.id == comments_table.c.post_id
        )
        if viewer_id is None:
            return select(*columns).select_from(source)

        return select(
            *columns,
            comment_votes_table.c.id.is_not(None).label("viewer_voted"),
            comment_votes_table.c.up.label("viewer_voted_up"),
        ).select_from(
            source.outerjoin(
                comment_votes_table,
                and_(
                    comment_votes_table.c.comment_id == comments_table.c.id,
                    comment_votes_table.c.user_id == viewer_id,
                ),
            )
        )

    def _active(self, comment_id: CommentId):
        """Criteria matching a single non-deleted comment."""
        return and_(
            comments_table.c.id == comment_id,
            comments_table.c.deleted_at.is_(None),
        )

    async def find_by_id(
        self, comment_id: CommentId, viewer_id: Optional[UserId] = None
    ) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = self._select(viewer_id).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_comment(dict(row)) if row else None

    async def find(
        self, comment_filter: CommentFilter, viewer_id: Optional[UserId] = None
    ) -> List[Comment]:
        """Find comments matching a filter, oldest first."""
        f = comment_filter
        stmt = self._select(viewer_id)

        if f.ids is not None:
            if not f.ids:
                return []
            stmt = stmt.where(comments_table.c.id.in_(f.ids))
        if f.post_id is not None:
            stmt = stmt.where(comments_table.c.post_id == f.post_id)
        if f.author_id is not None:
            stmt = stmt.where(comments_table.c.author_id == f.author_id)
        if f.parent_id is not None:
            stmt = stmt.where(comments_table.c.parent_id == f.parent_id)
        if f.top_level_only:
            stmt = stmt.where(comments_table.c.parent_id.is_(None))
        if f.descendants_of is not None:
            descendants = select(comment_replies_table.c.reply_id).where(
                comment_replies_table.c.parent_id == f.descendants_of
            )
            stmt = stmt.where(comments_table.c.id.in_(descendants))
        if not f.include_deleted:
            stmt = stmt.where(comments_table.c.deleted_at.is_(None))

        stmt = stmt.order_by(comments_table.c.created_at, comments_table.c.id)
        if f.offset:
            stmt = stmt.offset(f.offset)
        if f.limit is not None:
            stmt = stmt.limit(f.limit)

        result = await self.session.execute(stmt)
        return [row_to_comment(dict(row)) for row in result.mappings().all()]

    async def insert(self, comment: Comment) -> None:
        """Insert a new comment row."""
        stmt = insert(comments_table).values(**comment_to_dict(comment))
        await self.session.execute(stmt)

    async def increment_direct_replies(self, parent_id: CommentId) -> bool:
        """Atomically add one to an active parent's direct reply counter."""
        stmt = (
            update(comments_table)
            .where(self._active(parent_id))
            .values(direct_reply_count=comments_table.c.direct_reply_count + 1)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def increment_replies(self, ancestor_ids: Sequence[CommentId]) -> None:
        """Atomically add one to every ancestor's total reply counter."""
        if not ancestor_ids:
            return
        stmt = (
            update(comments_table)
            .where(comments_table.c.id.in_(ancestor_ids))
            .values(reply_count=comments_table.c.reply_count + 1)
        )
        await self.session.execute(stmt)

    async def add_reply_edges(
        self, ancestor_ids: Sequence[CommentId], reply_id: CommentId
    ) -> None:
        """Record an (ancestor, reply) edge for every ancestor."""
        if not ancestor_ids:
            return
        stmt = insert(comment_replies_table).values(
            [
                {"parent_id": ancestor_id, "reply_id": reply_id}
                for ancestor_id in ancestor_ids
            ]
        )
        await self.session.execute(stmt)

    async def index_activity(self, author_id: UserId, comment_id: CommentId) -> None:
        """Register the comment in the author's profile activity."""
        stmt = insert(activity_table).values(
            target_id=comment_id,
            user_id=author_id,
            target_type=ACTIVITY_TYPE_COMMENT,
        )
        await self.session.execute(stmt)

    async def unindex_activity(
        self, author_id: UserId, comment_id: CommentId
    ) -> None:
        """Remove the comment from the author's profile activity."""
        stmt = delete(activity_table).where(
            and_(
                activity_table.c.target_id == comment_id,
                activity_table.c.target_type == ACTIVITY_TYPE_COMMENT,
                activity_table.c.user_id == author_id,
            )
        )
        await self.session.execute(stmt)

    async def update_body(
        self, comment_id: CommentId, body: str, edited_at: datetime
    ) -> bool:
        """Replace the body of an active comment."""
        stmt = (
            update(comments_table)
            .where(self._active(comment_id))
            .values(body=body, edited_at=edited_at)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def update_posted_as(
        self, comment_id: CommentId, posted_as: AuthorityTier
    ) -> bool:
        """Change the tier an active comment is presented under."""
        stmt = (
            update(comments_table)
            .where(self._active(comment_id))
            .values(posted_as=posted_as.value)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def mark_deleted(
        self,
        comment_id: CommentId,
        deleted_at: datetime,
        deleted_by: UserId,
        deleted_as: AuthorityTier,
    ) -> bool:
        """Soft delete an active comment and clear its body."""
        stmt = (
            update(comments_table)
            .where(self._active(comment_id))
            .values(
                body="",
                deleted_at=deleted_at,
                deleted_by=deleted_by,
                deleted_as=deleted_as.value,
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def apply_tally(self, comment_id: CommentId, delta: TallyDelta) -> bool:
        """Atomically apply a vote delta to an active comment."""
        stmt = (
            update(comments_table)
            .where(self._active(comment_id))
            .values(
                upvotes=comments_table.c.upvotes + delta.upvotes,
                downvotes=comments_table.c.downvotes + delta.downvotes,
                points=comments_table.c.points + delta.points,
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

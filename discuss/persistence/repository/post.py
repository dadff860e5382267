"""PostgreSQL implementation of Post repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import Post
from discuss.domain.repository import PostRepository
from discuss.domain.value import PostId
from discuss.persistence.mappers import row_to_post
from discuss.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_post(dict(row)) if row else None

    async def is_locked(self, post_id: PostId) -> bool:
        """Report whether the post is currently locked."""
        stmt = select(posts_table.c.locked_at).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def record_comment(self, post_id: PostId, at: datetime) -> None:
        """Atomically increment comment_count and bump last activity."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(
                comment_count=posts_table.c.comment_count + 1,
                last_activity_at=at,
            )
        )
        await self.session.execute(stmt)

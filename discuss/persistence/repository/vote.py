"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import Vote
from discuss.domain.repository import VoteRepository
from discuss.domain.value import CommentId, UserId, VoteId
from discuss.persistence.mappers import row_to_vote, vote_to_dict
from discuss.persistence.tables import comment_votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find(self, comment_id: CommentId, user_id: UserId) -> Optional[Vote]:
        """Find a user's vote on a comment."""
        stmt = select(comment_votes_table).where(
            and_(
                comment_votes_table.c.comment_id == comment_id,
                comment_votes_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_vote(dict(row)) if row else None

    async def find_by_comment(self, comment_id: CommentId) -> List[Vote]:
        """Find all votes on a comment."""
        stmt = (
            select(comment_votes_table)
            .where(comment_votes_table.c.comment_id == comment_id)
            .order_by(comment_votes_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(dict(row)) for row in result.mappings().all()]

    async def save(self, vote: Vote) -> Vote:
        """Insert a vote; duplicates surface as IntegrityError."""
        stmt = insert(comment_votes_table).values(**vote_to_dict(vote))
        await self.session.execute(stmt)
        return vote

    async def set_direction(self, vote_id: VoteId, up: bool) -> bool:
        """Flip a vote in place."""
        stmt = (
            update(comment_votes_table)
            .where(comment_votes_table.c.id == vote_id)
            .values(up=up)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote."""
        stmt = delete(comment_votes_table).where(comment_votes_table.c.id == vote_id)
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

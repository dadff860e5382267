"""PostgreSQL implementation of User repository."""

from typing import List, Optional, Sequence

from sqlalchemy import and_, exists, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import User
from discuss.domain.repository import UserRepository
from discuss.domain.value import CommunityId, UserId
from discuss.persistence.mappers import row_to_user
from discuss.persistence.tables import community_mods_table, users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find many users in one query."""
        if not user_ids:
            return []
        stmt = select(users_table).where(users_table.c.id.in_(user_ids))
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def is_moderator(self, community_id: CommunityId, user_id: UserId) -> bool:
        """Report whether the user moderates the community."""
        stmt = select(
            exists().where(
                and_(
                    community_mods_table.c.community_id == community_id,
                    community_mods_table.c.user_id == user_id,
                )
            )
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def adjust_comment_count(self, user_id: UserId, delta: int) -> None:
        """Atomically add delta to comment_count (minimum 0)."""
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(
                comment_count=func.greatest(users_table.c.comment_count + delta, 0)
            )
        )
        await self.session.execute(stmt)

    async def adjust_points(self, user_id: UserId, delta: int) -> None:
        """Atomically add delta to the user's points."""
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(points=users_table.c.points + delta)
        )
        await self.session.execute(stmt)

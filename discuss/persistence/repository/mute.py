"""PostgreSQL implementation of Mute repository."""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import MuteRecord
from discuss.domain.repository import MuteRepository
from discuss.domain.value import UserId
from discuss.persistence.mappers import row_to_mute
from discuss.persistence.tables import muted_users_table


class PostgresMuteRepository(MuteRepository):
    """PostgreSQL implementation of MuteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_muted_users(self, user_id: UserId) -> List[MuteRecord]:
        """Find the users muted by user_id."""
        stmt = select(muted_users_table).where(muted_users_table.c.user_id == user_id)
        result = await self.session.execute(stmt)
        return [row_to_mute(dict(row)) for row in result.mappings().all()]

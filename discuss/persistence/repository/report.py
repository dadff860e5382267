"""PostgreSQL implementation of Report repository."""

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.repository import ReportRepository
from discuss.domain.value import CommentId
from discuss.persistence.tables import comment_reports_table


class PostgresReportRepository(ReportRepository):
    """PostgreSQL implementation of ReportRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def remove_for_comment(self, comment_id: CommentId) -> int:
        """Delete every pending report about a comment."""
        stmt = delete(comment_reports_table).where(
            comment_reports_table.c.comment_id == comment_id
        )
        result = await self.session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]

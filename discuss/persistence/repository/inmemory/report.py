"""In-memory report repository for testing."""

from discuss.domain.repository.report import ReportRepository
from discuss.domain.value import CommentId, UserId

from .database import InMemoryDatabase


class InMemoryReportRepository(ReportRepository):
    """In-memory implementation of ReportRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def remove_for_comment(self, comment_id: CommentId) -> int:
        """Delete every pending report about a comment."""
        remaining = [r for r in self.database.reports if r[0] != comment_id]
        removed = len(self.database.reports) - len(remaining)
        self.database.reports = remaining
        return removed

    async def report(
        self, comment_id: CommentId, reporter_id: UserId, reason: str
    ) -> None:
        """File a report (test seeding)."""
        self.database.reports.append((comment_id, reporter_id, reason))

    async def count_for_comment(self, comment_id: CommentId) -> int:
        """Number of pending reports about a comment."""
        return sum(1 for r in self.database.reports if r[0] == comment_id)

"""PostgreSQL repository implementations."""

from discuss.persistence.repository.comment import PostgresCommentRepository
from discuss.persistence.repository.mute import PostgresMuteRepository
from discuss.persistence.repository.post import PostgresPostRepository
from discuss.persistence.repository.report import PostgresReportRepository
from discuss.persistence.repository.transaction import PostgresTransactionManager
from discuss.persistence.repository.user import PostgresUserRepository
from discuss.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresMuteRepository",
    "PostgresPostRepository",
    "PostgresReportRepository",
    "PostgresTransactionManager",
    "PostgresUserRepository",
    "PostgresVoteRepository",
]

"""Mock persistence providers for testing."""

from dishka import Scope, provide

from discuss.domain.repository import (
    CommentRepository,
    MuteRepository,
    PostRepository,
    ReportRepository,
    TransactionManager,
    UserRepository,
    VoteRepository,
)
from discuss.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryDatabase,
    InMemoryMuteRepository,
    InMemoryPostRepository,
    InMemoryReportRepository,
    InMemoryTransactionManager,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from discuss.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses REQUEST scope to ensure test isolation - each test gets a fresh
    database shared by all of its repositories.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_database(self) -> InMemoryDatabase:
        """Provide the in-memory tables."""
        return InMemoryDatabase()

    @provide(scope=Scope.REQUEST)
    def get_transaction_manager(self, database: InMemoryDatabase) -> TransactionManager:
        """Provide in-memory transaction manager."""
        return InMemoryTransactionManager(database)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, database: InMemoryDatabase) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, database: InMemoryDatabase) -> PostRepository:
        """Provide in-memory post repository."""
        return InMemoryPostRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, database: InMemoryDatabase) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, database: InMemoryDatabase) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_mute_repository(self, database: InMemoryDatabase) -> MuteRepository:
        """Provide in-memory mute repository."""
        return InMemoryMuteRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_report_repository(self, database: InMemoryDatabase) -> ReportRepository:
        """Provide in-memory report repository."""
        return InMemoryReportRepository(database)

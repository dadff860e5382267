"""PostgreSQL transaction manager."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.repository import TransactionManager


class PostgresTransactionManager(TransactionManager):
    """Transactions over the request's session.

    Repositories built from the same session take part in whatever
    transaction is open on it.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with the session shared by the request's repositories.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        # Reads earlier in the request autobegin a transaction; close it so
        # the mutation gets a transaction of its own.
        if self.session.in_transaction():
            await self.session.commit()
        async with self.session.begin():
            yield

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        async with self.session.begin_nested():
            yield

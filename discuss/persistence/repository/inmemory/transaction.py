"""In-memory transaction manager for testing."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from discuss.domain.repository.transaction import TransactionManager

from .database import InMemoryDatabase


class InMemoryTransactionManager(TransactionManager):
    """Snapshot-based transactions over an InMemoryDatabase.

    Transactions are serialized with a lock, and any exception restores the
    snapshot taken when the block was entered.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with self._lock:
            snapshot = self.database.snapshot()
            try:
                yield
            except BaseException:
                self.database.restore(snapshot)
                raise

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        snapshot = self.database.snapshot()
        try:
            yield
        except BaseException:
            self.database.restore(snapshot)
            raise

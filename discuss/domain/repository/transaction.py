"""Transaction manager interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    """All-or-nothing execution of multi-statement mutations.

    Usage:
        async with transactions.transaction():
            await comment_repository.insert(comment)
            await user_repository.adjust_comment_count(author_id, 1)

    Any exception raised inside the block rolls back every statement issued
    through the repositories sharing this manager and is re-raised.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open a transaction that commits on clean exit."""
        pass

    @abstractmethod
    def savepoint(self) -> AbstractAsyncContextManager[None]:
        """Open a nested scope inside the current transaction.

        An exception rolls back only the statements issued inside the
        savepoint and is re-raised; the outer transaction stays usable.
        """
        pass

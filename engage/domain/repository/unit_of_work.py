"""Unit of work interface.

A unit of work groups repository writes into one atomic transaction.
Repositories obtained in the same request share the unit of work's
underlying connection, so every write made inside ``transaction()``
commits or rolls back together.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Awaitable, Callable

AfterCommitCallback = Callable[[], Awaitable[None]]


class UnitOfWork(ABC):
    """Transaction boundary shared by the repositories of one request."""

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic block.

        The outermost block commits on normal exit and rolls back every
        write on exception. Nested blocks behave like savepoints.

        Raises:
            TransientStoreFailure: If the store aborts the commit
        """
        pass

    @abstractmethod
    def savepoint(self) -> AbstractAsyncContextManager[None]:
        """Open a nested block inside the current transaction.

        A failure inside the block rolls back only the block's writes and
        leaves the enclosing transaction usable.
        """
        pass

    @abstractmethod
    def after_commit(self, callback: AfterCommitCallback) -> None:
        """Register a callback to run once the outermost transaction commits.

        Callbacks are discarded if the transaction rolls back.

        Args:
            callback: Coroutine function to await after commit
        """
        pass

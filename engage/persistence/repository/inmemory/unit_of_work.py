"""In-memory unit of work for testing."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from engage.domain.repository import AfterCommitCallback, UnitOfWork

from .store import InMemoryStore


class InMemoryUnitOfWork(UnitOfWork):
    """Rolls the shared store back to a snapshot when a block fails."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self._depth = 0
        self._callbacks: list[AfterCommitCallback] = []
        self.commits = 0
        self.rollbacks = 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        if self._depth > 0:
            async with self.savepoint():
                yield
            return

        snapshot = self.store.snapshot()
        self._depth += 1
        try:
            yield
        except Exception:
            self.store.restore(snapshot)
            self._callbacks.clear()
            self.rollbacks += 1
            raise
        finally:
            self._depth -= 1

        self.commits += 1
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            await callback()

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        snapshot = self.store.snapshot()
        try:
            yield
        except Exception:
            self.store.restore(snapshot)
            raise

    def after_commit(self, callback: AfterCommitCallback) -> None:
        self._callbacks.append(callback)

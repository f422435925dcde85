"""SQLAlchemy implementation of the unit of work."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from engage.domain.error import TransientStoreFailure
from engage.domain.repository import AfterCommitCallback, UnitOfWork
from engage.persistence.errors import is_transient


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Unit of work over the request's AsyncSession.

    Repositories of the same request share the session, so the outermost
    transaction() block commits their writes together.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize unit of work with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session
        self._depth = 0
        self._callbacks: list[AfterCommitCallback] = []

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        if self._depth > 0:
            async with self.savepoint():
                yield
            return

        self._depth += 1
        try:
            yield
            await self.session.commit()
        except DBAPIError as e:
            await self._rollback(e)
            if is_transient(e):
                raise TransientStoreFailure(
                    "The store aborted the transaction, please retry"
                ) from e
            raise
        except Exception as e:
            await self._rollback(e)
            raise
        finally:
            self._depth -= 1

        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            await callback()

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        async with self.session.begin_nested():
            yield

    def after_commit(self, callback: AfterCommitCallback) -> None:
        self._callbacks.append(callback)

    async def _rollback(self, error: Exception) -> None:
        logfire.warn("Transaction rollback", error=str(error))
        self._callbacks.clear()
        await self.session.rollback()

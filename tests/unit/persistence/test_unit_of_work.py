"""Unit tests for unit of work implementations."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import DBAPIError

from engage.domain.error import TransientStoreFailure
from engage.persistence.errors import is_transient
from engage.persistence.repository.inmemory import (
    InMemoryContentItemRepository,
    InMemoryStore,
    InMemoryUnitOfWork,
)
from engage.persistence.unit_of_work import SqlAlchemyUnitOfWork
from tests.conftest import make_content_item


class FakeDriverError(Exception):
    """Driver exception carrying a SQLSTATE like asyncpg's."""

    def __init__(self, sqlstate: str | None) -> None:
        super().__init__(f"sqlstate {sqlstate}")
        self.sqlstate = sqlstate


def make_dbapi_error(sqlstate: str | None, invalidated: bool = False) -> DBAPIError:
    return DBAPIError(
        "UPDATE likes", {}, FakeDriverError(sqlstate), connection_invalidated=invalidated
    )


class TestIsTransient:
    """Tests for is_transient function."""

    def test_serialization_failure_is_transient(self):
        assert is_transient(make_dbapi_error("40001")) is True

    def test_deadlock_is_transient(self):
        assert is_transient(make_dbapi_error("40P01")) is True

    def test_dropped_connection_is_transient(self):
        assert is_transient(make_dbapi_error(None, invalidated=True)) is True

    def test_unique_violation_is_not_transient(self):
        assert is_transient(make_dbapi_error("23505")) is False


class TestInMemoryUnitOfWork:
    """Tests for InMemoryUnitOfWork."""

    @pytest.mark.asyncio
    async def test_callbacks_run_after_commit(self):
        store = InMemoryStore()
        unit_of_work = InMemoryUnitOfWork(store)
        calls = []

        async def callback():
            calls.append(unit_of_work.commits)

        async with unit_of_work.transaction():
            unit_of_work.after_commit(callback)
            assert calls == []

        assert calls == [1]

    @pytest.mark.asyncio
    async def test_failure_restores_store_and_drops_callbacks(self):
        """A failed block leaves the store as it was before the block."""
        # Arrange
        store = InMemoryStore()
        unit_of_work = InMemoryUnitOfWork(store)
        repo = InMemoryContentItemRepository(store)
        kept = await repo.save(make_content_item())
        calls = []

        async def callback():
            calls.append("published")

        # Act
        with pytest.raises(RuntimeError):
            async with unit_of_work.transaction():
                await repo.save(make_content_item())
                await repo.increment_like_count(kept.id)
                unit_of_work.after_commit(callback)
                raise RuntimeError("boom")

        # Assert
        assert list(store.content_items) == [kept.id]
        assert store.content_items[kept.id].like_count == 0
        assert calls == []
        assert unit_of_work.rollbacks == 1

    @pytest.mark.asyncio
    async def test_savepoint_rolls_back_only_its_block(self):
        store = InMemoryStore()
        unit_of_work = InMemoryUnitOfWork(store)
        repo = InMemoryContentItemRepository(store)
        outer = make_content_item()

        async with unit_of_work.transaction():
            await repo.save(outer)
            with pytest.raises(RuntimeError):
                async with unit_of_work.savepoint():
                    await repo.save(make_content_item())
                    raise RuntimeError("boom")

        assert list(store.content_items) == [outer.id]
        assert unit_of_work.commits == 1


class TestSqlAlchemyUnitOfWork:
    """Tests for SqlAlchemyUnitOfWork against a mocked session."""

    def make_session(self):
        session = MagicMock()
        session.commit = AsyncMock()
        session.rollback = AsyncMock()
        return session

    @pytest.mark.asyncio
    async def test_outermost_block_commits_then_runs_callbacks(self):
        session = self.make_session()
        unit_of_work = SqlAlchemyUnitOfWork(session)
        callback = AsyncMock()

        async with unit_of_work.transaction():
            async with unit_of_work.transaction():
                unit_of_work.after_commit(callback)
            session.commit.assert_not_awaited()

        session.commit.assert_awaited_once()
        session.begin_nested.assert_called_once()
        callback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_transient_failure_is_translated(self):
        """Serialization failures surface as TransientStoreFailure."""
        session = self.make_session()
        session.commit.side_effect = make_dbapi_error("40001")
        unit_of_work = SqlAlchemyUnitOfWork(session)
        callback = AsyncMock()

        with pytest.raises(TransientStoreFailure):
            async with unit_of_work.transaction():
                unit_of_work.after_commit(callback)

        session.rollback.assert_awaited_once()
        callback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_permanent_failure_propagates_unchanged(self):
        session = self.make_session()
        unit_of_work = SqlAlchemyUnitOfWork(session)
        error = make_dbapi_error("23505")

        with pytest.raises(DBAPIError) as exc_info:
            async with unit_of_work.transaction():
                raise error

        assert exc_info.value is error
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_domain_errors_roll_back(self):
        session = self.make_session()
        unit_of_work = SqlAlchemyUnitOfWork(session)

        with pytest.raises(ValueError):
            async with unit_of_work.transaction():
                raise ValueError(str(uuid4()))

        session.commit.assert_not_awaited()
        session.rollback.assert_awaited_once()

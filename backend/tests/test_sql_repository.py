"""
Articles API — SQL Repository Tests
====================================

What:  Tests for SQLArticleRepository against an in-memory SQLite database.
Why:   Exercises the real SQLAlchemy statements (select/insert/update/delete)
       without a PostgreSQL server.
How:   aiosqlite driver + StaticPool (see conftest.sql_repository).

What we test:
    ✅ Schema creation is idempotent
    ✅ Insert returns the database-assigned id
    ✅ List is ordered by id
    ✅ Affected-row counts for update/delete
    ✅ Hostile input is stored verbatim (bound parameters, no injection)
    ✅ Driver failures become StorageError / FatalStorageError
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from articles_api.exceptions import FatalStorageError, NotFoundError, StorageError
from articles_api.repositories.sql_repository import SQLArticleRepository


class TestSQLRepositoryCrud:
    """Round trips through the SQLite-backed store."""

    @pytest.mark.asyncio
    async def test_ensure_schema_is_idempotent(self, sql_repository):
        await sql_repository.ensure_schema()

        assert await sql_repository.list_all() == []

    @pytest.mark.asyncio
    async def test_insert_then_get(self, sql_repository):
        created = await sql_repository.insert("Hello", "World")

        assert created.id >= 1
        fetched = await sql_repository.get_by_id(created.id)
        assert fetched == created

    @pytest.mark.asyncio
    async def test_list_is_ordered_by_id(self, sql_repository):
        for title in ("c", "a", "b"):
            await sql_repository.insert(title, "body")

        articles = await sql_repository.list_all()

        assert [a.id for a in articles] == sorted(a.id for a in articles)
        assert [a.title for a in articles] == ["c", "a", "b"]

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, sql_repository):
        with pytest.raises(NotFoundError):
            await sql_repository.get_by_id(999)

    @pytest.mark.asyncio
    async def test_update_counts(self, sql_repository):
        created = await sql_repository.insert("a", "b")

        assert await sql_repository.update_by_id(created.id, "x", "y") == 1
        assert await sql_repository.update_by_id(created.id + 100, "x", "y") == 0

        fetched = await sql_repository.get_by_id(created.id)
        assert (fetched.title, fetched.content) == ("x", "y")
        assert len(await sql_repository.list_all()) == 1

    @pytest.mark.asyncio
    async def test_delete_counts(self, sql_repository):
        created = await sql_repository.insert("a", "b")

        assert await sql_repository.delete_by_id(created.id) == 1
        assert await sql_repository.delete_by_id(created.id) == 0
        with pytest.raises(NotFoundError):
            await sql_repository.get_by_id(created.id)

    @pytest.mark.asyncio
    async def test_sql_in_input_is_stored_verbatim(self, sql_repository):
        hostile = "x'); DROP TABLE articles; --"

        created = await sql_repository.insert(hostile, hostile)

        assert (await sql_repository.get_by_id(created.id)).title == hostile
        assert len(await sql_repository.list_all()) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("article_id", [0, -1, 2**31, 99999999999999999999])
    async def test_out_of_range_ids_match_nothing(self, sql_repository, article_id):
        await sql_repository.insert("a", "b")

        with pytest.raises(NotFoundError):
            await sql_repository.get_by_id(article_id)
        assert await sql_repository.update_by_id(article_id, "x", "y") == 0
        assert await sql_repository.delete_by_id(article_id) == 0
        assert len(await sql_repository.list_all()) == 1

    @pytest.mark.asyncio
    async def test_health_check(self, sql_repository):
        assert await sql_repository.health_check() is True
        assert sql_repository.store_name == "postgres"


def _failing_session_factory():
    """A session factory whose sessions fail on execute/flush like a lost connection."""
    error = OperationalError("SELECT 1", {}, Exception("connection lost"))

    session = MagicMock()
    session.execute.side_effect = error
    session.flush.side_effect = error

    async def _noop(*args, **kwargs):
        return None

    session.commit.side_effect = _noop
    session.rollback.side_effect = _noop
    session.close.side_effect = _noop

    # MagicMock configures __aenter__/__aexit__ as AsyncMocks
    context = MagicMock()
    context.__aenter__.return_value = session
    context.__aexit__.return_value = False
    return MagicMock(return_value=context)


class TestSQLRepositoryFailures:
    """Driver errors are translated, never leaked."""

    def setup_method(self):
        self.repository = SQLArticleRepository(
            engine=MagicMock(),
            session_factory=_failing_session_factory(),
        )

    @pytest.mark.asyncio
    async def test_list_failure_raises_storage_error(self):
        with pytest.raises(StorageError) as exc_info:
            await self.repository.list_all()

        assert isinstance(exc_info.value.__cause__, OperationalError)

    @pytest.mark.asyncio
    async def test_get_failure_is_storage_error_not_not_found(self):
        with pytest.raises(StorageError):
            await self.repository.get_by_id(1)

    @pytest.mark.asyncio
    async def test_insert_failure_raises_storage_error(self):
        with pytest.raises(StorageError):
            await self.repository.insert("a", "b")

    @pytest.mark.asyncio
    async def test_update_and_delete_failures_raise_storage_error(self):
        with pytest.raises(StorageError):
            await self.repository.update_by_id(1, "a", "b")
        with pytest.raises(StorageError):
            await self.repository.delete_by_id(1)

    @pytest.mark.asyncio
    async def test_unreachable_database_is_fatal_at_startup(self):
        engine = MagicMock()
        engine.begin.side_effect = ConnectionRefusedError("connection refused")
        repository = SQLArticleRepository(engine=engine, session_factory=MagicMock())

        with pytest.raises(FatalStorageError):
            await repository.ensure_schema()

    @pytest.mark.asyncio
    async def test_unreachable_database_fails_health_check(self):
        engine = MagicMock()
        engine.connect.side_effect = ConnectionRefusedError("connection refused")
        repository = SQLArticleRepository(engine=engine, session_factory=MagicMock())

        assert await repository.health_check() is False

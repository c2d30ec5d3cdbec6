"""
Articles API — Configuration Tests
===================================

What:  Tests for Settings and for the repository selection it drives.

What we test:
    ✅ DB_* variables compose an asyncpg URL (credentials escaped)
    ✅ DATABASE_URL overrides the composed URL
    ✅ Invalid store names / log levels fail at load time
    ✅ ARTICLE_STORE picks the repository implementation
    ✅ Startup fails when the schema cannot be ensured
"""

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.engine import make_url

from articles_api.config import Settings
from articles_api.exceptions import FatalStorageError
from articles_api.main import build_repository, create_app, lifespan
from articles_api.repositories.memory_repository import InMemoryArticleRepository
from articles_api.repositories.sql_repository import SQLArticleRepository


def _settings(**overrides) -> Settings:
    """Settings built from keyword arguments only, ignoring any .env file."""
    overrides.setdefault("database_url", "")
    return Settings(_env_file=None, **overrides)


class TestDatabaseUrl:

    def test_composed_from_db_variables(self):
        config = _settings(
            db_host="db.internal",
            db_port=5433,
            db_user="writer",
            db_password="p@ss:word/1",
            db_name="news",
        )

        url = make_url(config.sqlalchemy_url)

        assert url.drivername == "postgresql+asyncpg"
        assert (url.host, url.port, url.database) == ("db.internal", 5433, "news")
        assert (url.username, url.password) == ("writer", "p@ss:word/1")

    def test_database_url_overrides(self):
        config = _settings(db_host="ignored", database_url="sqlite+aiosqlite:///./local.db")

        assert config.sqlalchemy_url == "sqlite+aiosqlite:///./local.db"

    def test_out_of_range_port_rejected(self):
        with pytest.raises(PydanticValidationError):
            _settings(db_port=70000)


class TestSettingsValidation:

    def test_store_name_is_normalized(self):
        assert _settings(article_store="MEMORY").article_store == "memory"

    def test_unknown_store_rejected(self):
        with pytest.raises(PydanticValidationError):
            _settings(article_store="mongo")

    def test_log_level_is_normalized(self):
        assert _settings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            _settings(log_level="chatty")

    def test_cors_origins_list(self):
        config = _settings(cors_origins="http://a.test, http://b.test,")

        assert config.cors_origins_list == ["http://a.test", "http://b.test"]


class TestRepositorySelection:

    def test_memory_store(self):
        assert isinstance(build_repository(_settings(article_store="memory")), InMemoryArticleRepository)

    @pytest.mark.asyncio
    async def test_postgres_store_builds_sql_repository(self):
        # The engine connects lazily, so a SQLite URL is enough here
        repository = build_repository(
            _settings(article_store="postgres", database_url="sqlite+aiosqlite://")
        )

        assert isinstance(repository, SQLArticleRepository)
        await repository.close()


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_ensures_schema_and_shutdown_closes(self, mock_repository):
        app = create_app(repository=mock_repository)

        async with lifespan(app):
            mock_repository.ensure_schema.assert_awaited_once()
            mock_repository.close.assert_not_awaited()

        mock_repository.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_schema_failure_aborts_startup(self, mock_repository):
        mock_repository.ensure_schema.side_effect = FatalStorageError()
        app = create_app(repository=mock_repository)

        with pytest.raises(FatalStorageError):
            async with lifespan(app):
                pass  # pragma: no cover

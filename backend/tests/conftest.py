"""
Articles API — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (repositories, API clients).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── memory_repository: Empty InMemoryArticleRepository
    ├── sql_repository: SQLArticleRepository on an in-memory SQLite database
    ├── any_repository: Parametrized over both of the above
    ├── mock_repository: AsyncMock standing in for any repository
    ├── test_client: HTTPX AsyncClient over the app with the memory store
    └── repository_client: HTTPX AsyncClient over any_repository
"""

import os

# Override settings for testing BEFORE any application imports
# Why: Keeps tests away from a real PostgreSQL server
os.environ["ARTICLE_STORE"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from articles_api.main import create_app  # noqa: E402
from articles_api.repositories.base import ArticleRepository  # noqa: E402
from articles_api.repositories.memory_repository import InMemoryArticleRepository  # noqa: E402
from articles_api.repositories.sql_repository import SQLArticleRepository  # noqa: E402


def _sqlite_repository():
    """
    SQLArticleRepository over a private in-memory SQLite database.

    StaticPool keeps one connection alive, so every session sees the same
    ":memory:" database for the duration of the test.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    return SQLArticleRepository(engine)


def _client_for(repository):
    app = create_app(repository=repository)
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def memory_repository():
    """Provides an empty in-memory repository."""
    return InMemoryArticleRepository()


@pytest_asyncio.fixture
async def sql_repository():
    """Provides an empty SQLite-backed repository with the schema in place."""
    repository = _sqlite_repository()
    await repository.ensure_schema()
    yield repository
    await repository.close()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def any_repository(request):
    """Runs a test once against each repository implementation."""
    if request.param == "memory":
        yield InMemoryArticleRepository()
        return
    repository = _sqlite_repository()
    await repository.ensure_schema()
    yield repository
    await repository.close()


@pytest.fixture
def mock_repository():
    """
    Provides an AsyncMock with the ArticleRepository interface.

    Usage:
        mock_repository.update_by_id.return_value = 0
        await service.update_article(mock_repository, 1, payload)
    """
    repository = AsyncMock(spec=ArticleRepository)
    repository.store_name = "mock"
    return repository


@pytest_asyncio.fixture
async def test_client(memory_repository):
    """
    Provides an async HTTP test client bound to the in-memory store.

    ASGITransport does not run the lifespan, so the repository is injected
    through create_app().
    """
    async with _client_for(memory_repository) as client:
        yield client


@pytest_asyncio.fixture
async def repository_client(any_repository):
    """HTTP test client parametrized over both repository implementations."""
    async with _client_for(any_repository) as client:
        yield client

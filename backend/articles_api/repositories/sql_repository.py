"""
Articles API — SQL Article Repository
======================================

What:  ArticleRepository backed by async SQLAlchemy (PostgreSQL via asyncpg).
Why:   Durable storage for articles.
How:   Each operation opens its own session through session_scope(), runs a
       single statement built from the Article model, and commits.
Who:   Selected by the lifespan when ARTICLE_STORE=postgres.

Injection safety:
    Every statement is a SQLAlchemy expression (select/update/delete or an
    ORM insert). User-supplied id, title and content are always sent as bound
    parameters; no SQL text is ever assembled from request data.

Statements issued:
    ensure_schema  → CREATE TABLE IF NOT EXISTS articles (...)
    list_all       → SELECT ... FROM articles ORDER BY id
    get_by_id      → SELECT ... FROM articles WHERE id = :id
    insert         → INSERT INTO articles (title, content) VALUES (:t, :c)
    update_by_id   → UPDATE articles SET title = :t, content = :c WHERE id = :id
    delete_by_id   → DELETE FROM articles WHERE id = :id
"""

import logging
from typing import List

from sqlalchemy import delete, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from articles_api.database import Base, build_session_factory, session_scope
from articles_api.exceptions import FatalStorageError, NotFoundError, StorageError
from articles_api.models.article import Article
from articles_api.repositories.base import ArticleRepository
from articles_api.schemas.article import ArticleResponse

logger = logging.getLogger(__name__)

# asyncpg raises OSError subclasses (ConnectionRefusedError...) when the
# server is unreachable; SQLAlchemy does not always wrap those.
_STORAGE_FAILURES = (SQLAlchemyError, OSError)

# SERIAL is a 32-bit column; an id outside it cannot match a row, and the
# drivers reject it before the query runs (OverflowError / DataError).
_MAX_SERIAL_ID = 2**31 - 1


def _id_in_range(article_id: int) -> bool:
    return 1 <= article_id <= _MAX_SERIAL_ID


def _to_response(row: Article) -> ArticleResponse:
    """Map ORM row → response model. NULL columns read as empty strings."""
    return ArticleResponse(
        id=row.id,
        title=row.title or "",
        content=row.content or "",
    )


class SQLArticleRepository(ArticleRepository):
    """Implements the ArticleRepository contract over an AsyncEngine."""

    store_name = "postgres"

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ):
        self._engine = engine
        self._session_factory = session_factory or build_session_factory(engine)

    async def ensure_schema(self) -> None:
        try:
            async with self._engine.begin() as conn:
                # checkfirst=True (the default) makes this CREATE ... IF NOT EXISTS
                await conn.run_sync(Base.metadata.create_all)
        except _STORAGE_FAILURES as e:
            logger.critical("Error creating articles table: %s", e)
            raise FatalStorageError(
                context={"error_type": type(e).__name__},
            ) from e
        logger.info("Connected to the database")

    async def list_all(self) -> List[ArticleResponse]:
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(select(Article).order_by(Article.id))
                return [_to_response(row) for row in result.scalars().all()]
        except _STORAGE_FAILURES as e:
            logger.error("Error querying articles: %s", e)
            raise StorageError(
                message="Could not list articles",
                context={"error_type": type(e).__name__},
            ) from e

    async def get_by_id(self, article_id: int) -> ArticleResponse:
        if not _id_in_range(article_id):
            raise NotFoundError(resource_id=article_id)
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(
                    select(Article).where(Article.id == article_id)
                )
                row = result.scalar_one_or_none()
        except _STORAGE_FAILURES as e:
            logger.error("Error fetching article %s: %s", article_id, e)
            raise StorageError(
                message="Could not retrieve the article",
                context={"article_id": article_id, "error_type": type(e).__name__},
            ) from e

        if row is None:
            raise NotFoundError(resource_id=article_id)
        return _to_response(row)

    async def insert(self, title: str, content: str) -> ArticleResponse:
        try:
            async with session_scope(self._session_factory) as session:
                row = Article(title=title, content=content)
                session.add(row)
                # flush() issues the INSERT and populates the SERIAL id
                await session.flush()
                return _to_response(row)
        except _STORAGE_FAILURES as e:
            logger.error("Error creating article: %s", e)
            raise StorageError(
                message="Could not create the article",
                context={"error_type": type(e).__name__},
            ) from e

    async def update_by_id(self, article_id: int, title: str, content: str) -> int:
        if not _id_in_range(article_id):
            return 0
        statement = (
            update(Article)
            .where(Article.id == article_id)
            .values(title=title, content=content)
            .execution_options(synchronize_session=False)
        )
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(statement)
                return result.rowcount
        except _STORAGE_FAILURES as e:
            logger.error("Error updating article %s: %s", article_id, e)
            raise StorageError(
                message="Could not update the article",
                context={"article_id": article_id, "error_type": type(e).__name__},
            ) from e

    async def delete_by_id(self, article_id: int) -> int:
        if not _id_in_range(article_id):
            return 0
        statement = (
            delete(Article)
            .where(Article.id == article_id)
            .execution_options(synchronize_session=False)
        )
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(statement)
                return result.rowcount
        except _STORAGE_FAILURES as e:
            logger.error("Error deleting article %s: %s", article_id, e)
            raise StorageError(
                message="Could not delete the article",
                context={"article_id": article_id, "error_type": type(e).__name__},
            ) from e

    async def health_check(self) -> bool:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except _STORAGE_FAILURES as e:
            logger.warning("Health check: database unreachable: %s", e)
            return False

    async def close(self) -> None:
        await self._engine.dispose()
        logger.info("Disconnected from the database")

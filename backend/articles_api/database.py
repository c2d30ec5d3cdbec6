"""
Articles API — Database Engine & Session Management
====================================================

What:  Async SQLAlchemy engine factory, session factory, and a session scope.
Why:   Centralizes all database connection logic in one place.
How:   build_engine() creates an async engine with connection pooling;
       session_scope() yields a session that commits on success and
       rolls back on error.
Who:   Used by SQLArticleRepository and by Alembic (Base.metadata).
When:  The engine is built once in the application lifespan; a session is
       opened per repository call.

Why the engine is not created at import time:
    The in-memory store never touches a database, and tests build their own
    SQLite engines. Deferring creation keeps importing this module free of
    side effects.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from articles_api.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object between the runtime schema check
    (ensure_schema) and Alembic migrations.
    """
    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine described by the settings.

    Pool sizing applies to PostgreSQL only; SQLite's async pool does not
    accept pool_size/max_overflow.
    """
    url = settings.sqlalchemy_url
    options = {"echo": settings.log_level == "DEBUG"}
    if make_url(url).get_backend_name() != "sqlite":
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to the engine.

    expire_on_commit=False: attributes stay readable after commit, so rows
    can be mapped to response models once the transaction has ended.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a transactional scope around a single unit of work.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the caller (the caller performs one statement)
        3. On success: commits the transaction
        4. On error: rolls back and re-raises
        5. Always: closes the session (returns connection to pool)

    Example:
        async with session_scope(factory) as session:
            await session.execute(delete(Article).where(Article.id == 1))
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

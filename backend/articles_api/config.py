"""
Articles API — Application Configuration
=========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.

Database connection:
    The connection is described by the classic DB_HOST / DB_PORT / DB_USER /
    DB_PASSWORD / DB_NAME variables. They are composed into an asyncpg URL by
    `sqlalchemy_url`. DATABASE_URL, when set, replaces the composed URL
    entirely (useful for SQLite in local experiments).
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Attributes are grouped by concern for readability.
    """

    # ── Database ──────────────────────────────────────────────────────────
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432, ge=1, le=65535)
    db_user: str = Field(default="postgres")
    db_password: str = Field(default="")
    db_name: str = Field(default="articles")

    # What: Full SQLAlchemy URL; overrides the DB_* variables when non-empty
    database_url: str = Field(default="")

    # What: Connection pool sizing for the PostgreSQL engine
    # Ignored for SQLite URLs, which use SQLAlchemy's default pool
    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=5, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # What: Which repository implementation backs the API
    # Valid: "postgres" (persisted) or "memory" (process-local, lost on restart)
    article_store: str = Field(default="postgres")

    @field_validator("article_store")
    @classmethod
    def validate_article_store(cls, v: str) -> str:
        """Ensures the store name is one we know how to build."""
        valid_stores = {"postgres", "memory"}
        lower = v.lower()
        if lower not in valid_stores:
            raise ValueError(f"Invalid article_store '{v}'. Must be one of: {valid_stores}")
        return lower

    @property
    def sqlalchemy_url(self) -> str:
        """
        What: The URL handed to create_async_engine.
        Why URL.create: Credentials containing '@', ':' or '/' are escaped
        correctly, which naive string formatting gets wrong.
        """
        if self.database_url:
            return self.database_url
        return URL.create(
            drivername="postgresql+asyncpg",
            username=self.db_user or None,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DB_HOST and db_host both work
        "extra": "ignore",
    }


# Singleton instance, imported throughout the application
settings = Settings()

"""
Articles API — FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, error mapping
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn articles_api.main:app) or by run().

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │ Req ID   │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌──────────────────┐ ┌─────────────┐  │
    │  │ GET /    │ │ /articles[/{id}] │ │ GET /health │  │
    │  └──────────┘ └──────────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Decode/Validation→400 │ NotFound→404 │ DB→500 │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Build the article repository selected by ARTICLE_STORE
       (skipped when one was injected through create_app)
    3. Ensure the articles table exists; failure aborts startup

    Shutdown:
    1. Close the repository (disposes the engine's connection pool)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from articles_api import __version__
from articles_api.config import Settings, settings
from articles_api.database import build_engine
from articles_api.exceptions import (
    DecodeError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from articles_api.middleware.logging import RequestLoggingMiddleware
from articles_api.middleware.request_id import RequestIDMiddleware, request_id_var
from articles_api.repositories.base import ArticleRepository
from articles_api.repositories.memory_repository import InMemoryArticleRepository
from articles_api.repositories.sql_repository import SQLArticleRepository
from articles_api.routes import articles, health, home

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during app startup, before any other initialization.
    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # These libraries log every statement / access line at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Repository Selection
# ══════════════════════════════════════════════════════════════════════════

def build_repository(config: Settings) -> ArticleRepository:
    """
    Build the repository named by ARTICLE_STORE.

    "memory"   → InMemoryArticleRepository (nothing persisted)
    "postgres" → SQLArticleRepository over an engine for config.sqlalchemy_url
    """
    if config.article_store == "memory":
        logger.warning("Using the in-memory article store; data is lost on restart")
        return InMemoryArticleRepository()
    return SQLArticleRepository(build_engine(config))


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle: startup and shutdown procedures.

    ensure_schema() raises FatalStorageError when the table cannot be
    created; it is deliberately not caught so uvicorn aborts startup.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Articles API starting up...")

    repository: Optional[ArticleRepository] = getattr(app.state, "article_repository", None)
    if repository is None:
        repository = build_repository(settings)
        app.state.article_repository = repository

    await repository.ensure_schema()

    logger.info("Server Start on http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Articles API shutting down...")
    await repository.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _describe_request_errors(exc: RequestValidationError) -> str:
    """Flatten FastAPI's error list into one readable sentence."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "Request could not be decoded: " + "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        RequestValidationError  → 400 {"message"} (body/path decode failure)
        DecodeError             → 400 {"message"}
        ValidationError         → 400 [{"key", "error"}, ...]
        NotFoundError           → 404 {"message"}
        StorageError            → 500, empty body
        Exception (fallback)    → 500, empty body

    Security: storage errors never expose driver messages or SQL; the
    details are logged server-side with the request ID.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Malformed JSON, wrong JSON types, or a non-integer article ID."""
        return await handle_decode_error(request, DecodeError(message=_describe_request_errors(exc)))

    @app.exception_handler(DecodeError)
    async def handle_decode_error(request: Request, exc: DecodeError):
        rid = request_id_var.get("")
        logger.warning("[%s] Decode error: %s", rid, exc.message)
        return JSONResponse(status_code=400, content={"message": exc.message})

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Every missing required field, in declaration order."""
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.context.get("fields"))
        return JSONResponse(
            status_code=400,
            content=[{"key": error.field, "error": error.message} for error in exc.errors],
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return Response(status_code=500)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace goes to the log, never to the client."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, exc, exc_info=True)
        return Response(status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(repository: Optional[ArticleRepository] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        repository: Store to use instead of the one named by ARTICLE_STORE.
            Tests inject an InMemoryArticleRepository or a SQLite-backed
            SQLArticleRepository here.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Articles API",
        description="This is a sample API for managing Articles",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    if repository is not None:
        app.state.article_repository = repository

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(home.router)
    app.include_router(articles.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""
    uvicorn.run(
        "articles_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `articles_api.main:app` to be importable
app = create_app()

"""
Articles API — Application Package Initializer
==============================================

What: Marks the `articles_api` directory as a Python package.
Why:  Enables module imports like `from articles_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Validation, Mapping)  │  ← Business rules
    ├─────────────────────────────────────┤
    │     Repositories (Storage Access)   │  ← SQL or in-memory
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy engine
    └─────────────────────────────────────┘

    Routes translate HTTP to service calls; services never see HTTP; repositories
    never see validation. Each layer is testable on its own.
"""

__version__ = "1.0.0"

"""
Articles API — Article SQLAlchemy Model
========================================

What:  ORM model representing the `articles` table.
Why:   Maps Python objects to database rows; the statements built from it
       always send user input as bound parameters.
Who:   Used by SQLArticleRepository and by Alembic for schema management.

Table Design:
    - id: SERIAL primary key, assigned by the database on insert, never by us
    - title: VARCHAR(255)
    - content: TEXT (no length limit)
"""

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from articles_api.database import Base


class Article(Base):
    """
    Represents a single article row.

    Lifecycle:
        1. Inserted without an id; the database assigns one
        2. Read via list or get-by-id
        3. title/content overwritten by update-by-id (id is immutable)
        4. Removed by delete-by-id (hard delete, no audit trail)
    """

    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, title={self.title!r})>"

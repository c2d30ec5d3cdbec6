"""
Articles API — Abstract Article Repository
===========================================

What:  Abstract base class defining the contract for article storage.
Why:   The API runs unchanged against PostgreSQL or against process memory.
       This is the Strategy design pattern: the concrete class is selected
       from ARTICLE_STORE at startup.
How:   Concrete implementations inherit from ArticleRepository and implement
       every abstract coroutine.
Who:   Called by ArticleService; built by the application lifespan.

Contract shared by all implementations:
    - Every call is an independent unit of work; nothing spans two calls
    - Ids are assigned by the store on insert, starting at 1, never reused
    - list_all() returns articles ordered by id
    - Storage failures surface as StorageError, never as driver exceptions
    - An id no article can have (zero, negative, beyond the column range)
      is simply absent: NotFoundError on get, 0 affected rows otherwise
    - Length limits are the store's own: PostgreSQL rejects a title over
      255 characters (StorageError); the memory store keeps it
"""

from abc import ABC, abstractmethod
from typing import List

from articles_api.schemas.article import ArticleResponse


class ArticleRepository(ABC):
    """
    Abstract interface for article persistence.

    Implementations:
        - SQLArticleRepository: parameterized statements over async SQLAlchemy
        - InMemoryArticleRepository: asyncio.Lock-guarded dict keyed by id
    """

    #: Name reported by the health endpoint
    store_name: str = "unknown"

    @abstractmethod
    async def ensure_schema(self) -> None:
        """
        Make sure the articles table exists.

        Raises:
            FatalStorageError: The store is unreachable or the DDL failed.
                This is the only failure the application does not recover from.
        """
        ...

    @abstractmethod
    async def list_all(self) -> List[ArticleResponse]:
        """
        Return every article, ordered by id.

        Returns an empty list (never raises NotFoundError) for an empty table.

        Raises:
            StorageError: The query failed.
        """
        ...

    @abstractmethod
    async def get_by_id(self, article_id: int) -> ArticleResponse:
        """
        Return the article with the given id.

        Raises:
            NotFoundError: No article has this id.
            StorageError: The query failed.
        """
        ...

    @abstractmethod
    async def insert(self, title: str, content: str) -> ArticleResponse:
        """
        Store a new article and return it with its assigned id.

        Raises:
            StorageError: The insert failed.
        """
        ...

    @abstractmethod
    async def update_by_id(self, article_id: int, title: str, content: str) -> int:
        """
        Overwrite title and content of the matching article.

        Returns:
            int: Number of affected rows (0 or 1). The caller maps 0 to
                 NotFoundError; no row is ever created here.

        Raises:
            StorageError: The update failed.
        """
        ...

    @abstractmethod
    async def delete_by_id(self, article_id: int) -> int:
        """
        Remove the matching article.

        Returns:
            int: Number of affected rows (0 or 1).

        Raises:
            StorageError: The delete failed.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the store is reachable.

        Returns: True if a trivial query succeeds, False otherwise. Never raises.
        """
        ...

    async def close(self) -> None:
        """Release held resources. Called once at application shutdown."""
        return None

"""
Articles API — In-Memory Article Repository
============================================

What:  ArticleRepository that keeps articles in a process-local ordered map.
Why:   Lets the API run (demos, tests, local development) without a database.
How:   A dict keyed by id, in insertion order, guarded by an asyncio.Lock.
Who:   Selected by the lifespan when ARTICLE_STORE=memory.

Thread Safety:
    All requests run on uvicorn's single event loop, so an asyncio.Lock is
    enough to serialize mutations. Every operation holds the lock for its
    whole read-modify-write sequence.
    NOT shared across worker processes: each worker has its own map.
"""

import itertools
from asyncio import Lock
from typing import Dict, List

from articles_api.exceptions import NotFoundError
from articles_api.repositories.base import ArticleRepository
from articles_api.schemas.article import ArticleResponse


class InMemoryArticleRepository(ArticleRepository):
    """
    Lock-guarded ordered map of articles.

    Ids come from a counter starting at 1 and are never reused, even after
    a delete, mirroring a SERIAL column.
    """

    store_name = "memory"

    def __init__(self):
        self._articles: Dict[int, ArticleResponse] = {}
        self._ids = itertools.count(1)
        self._lock = Lock()

    async def ensure_schema(self) -> None:
        return None

    async def list_all(self) -> List[ArticleResponse]:
        async with self._lock:
            # Ids are issued in increasing order, so insertion order is id order
            return [article.model_copy() for article in self._articles.values()]

    async def get_by_id(self, article_id: int) -> ArticleResponse:
        async with self._lock:
            article = self._articles.get(article_id)
            if article is None:
                raise NotFoundError(resource_id=article_id)
            return article.model_copy()

    async def insert(self, title: str, content: str) -> ArticleResponse:
        async with self._lock:
            article = ArticleResponse(id=next(self._ids), title=title, content=content)
            self._articles[article.id] = article
            return article.model_copy()

    async def update_by_id(self, article_id: int, title: str, content: str) -> int:
        async with self._lock:
            if article_id not in self._articles:
                return 0
            self._articles[article_id] = ArticleResponse(
                id=article_id, title=title, content=content
            )
            return 1

    async def delete_by_id(self, article_id: int) -> int:
        async with self._lock:
            if self._articles.pop(article_id, None) is None:
                return 0
            return 1

    async def health_check(self) -> bool:
        return True

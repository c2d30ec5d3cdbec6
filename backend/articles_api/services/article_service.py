"""
Articles API — Article Service (Business Logic)
================================================

What:  Maps each article use case onto exactly one repository call.
Why:   Keeps validation and not-found mapping out of the route handlers,
       so they can be tested without HTTP.
How:   Stateless methods receive the repository for each call, the same way
       route handlers receive it from FastAPI's dependency injection.
Who:   Called by the article route handlers.

Per-request flow:
    Received → Decoded (FastAPI) → Validated (create only) → Executed → Responded

Error Handling Strategy:
    - Validation failures raise ValidationError before the repository is touched
    - A zero affected-row count on update/delete becomes NotFoundError
    - StorageError from the repository propagates unchanged
    The global exception handlers in main.py turn these into HTTP responses.
"""

import logging
from typing import List

from articles_api.exceptions import NotFoundError, ValidationError
from articles_api.repositories.base import ArticleRepository
from articles_api.schemas.article import ArticlePayload, ArticleResponse
from articles_api.services.validation import validate_article

logger = logging.getLogger(__name__)


class ArticleService:
    """
    Business logic layer for article operations.

    Responsibilities:
        - list_articles(): all articles (possibly empty)
        - get_article(): single article or NotFoundError
        - create_article(): validate, then insert
        - update_article(): overwrite, NotFoundError when nothing matched
        - delete_article(): remove, NotFoundError when nothing matched
    """

    async def list_articles(self, repository: ArticleRepository) -> List[ArticleResponse]:
        logger.info("Endpoint hit: list_articles")
        return await repository.list_all()

    async def get_article(
        self, repository: ArticleRepository, article_id: int
    ) -> ArticleResponse:
        logger.info("Endpoint hit: get_article")
        return await repository.get_by_id(article_id)

    async def create_article(
        self, repository: ArticleRepository, payload: ArticlePayload
    ) -> ArticleResponse:
        """
        Validate the payload and store it as a new article.

        Raises:
            ValidationError: title and/or content missing (all reported at once).
                The repository is not called in that case.
            StorageError: The insert failed.
        """
        logger.info("Endpoint hit: create_article")
        errors = validate_article(payload)
        if errors:
            raise ValidationError(errors)

        article = await repository.insert(payload.title, payload.content)
        logger.info("Article %d created", article.id)
        return article

    async def update_article(
        self,
        repository: ArticleRepository,
        article_id: int,
        payload: ArticlePayload,
    ) -> ArticleResponse:
        """
        Overwrite an article's title and content.

        No validation and no upsert: an unknown id is a 404 and creates nothing.

        Returns:
            The article as stored: the path id with the submitted fields.
        """
        logger.info("Endpoint hit: update_article")
        affected = await repository.update_by_id(article_id, payload.title, payload.content)
        if affected == 0:
            raise NotFoundError(resource_id=article_id)
        return ArticleResponse(id=article_id, title=payload.title, content=payload.content)

    async def delete_article(self, repository: ArticleRepository, article_id: int) -> None:
        logger.info("Endpoint hit: delete_article")
        affected = await repository.delete_by_id(article_id)
        if affected == 0:
            raise NotFoundError(resource_id=article_id)
        logger.info("Article %d deleted", article_id)


# ── Singleton Instance ────────────────────────────────────────────────────
# ArticleService is stateless; the repository is passed in on every call
article_service = ArticleService()

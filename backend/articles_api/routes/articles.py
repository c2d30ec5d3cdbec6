"""
Articles API — Article Route Handlers
======================================

What:  CRUD endpoints for the article resource.
Why:   The whole public surface of the service.
How:   Extracts path/body data, delegates to ArticleService, returns JSON.
       Errors are raised as application exceptions and turned into
       responses by the global handlers in main.py.

Endpoints:
    GET    /articles          → 200 list (possibly empty)
    GET    /articles/{id}     → 200 article | 404
    POST   /articles          → 201 article | 400 field errors
    PUT    /articles/{id}     → 200 article | 404
    DELETE /articles/{id}     → 204 empty   | 404
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Response

from articles_api.dependencies import get_article_repository
from articles_api.repositories.base import ArticleRepository
from articles_api.schemas.article import (
    ArticlePayload,
    ArticleResponse,
    ErrorResponse,
    FieldErrorResponse,
)
from articles_api.services.article_service import article_service

router = APIRouter(tags=["Articles"])


@router.get(
    "/articles",
    response_model=List[ArticleResponse],
    responses={
        500: {"description": "Storage error (empty body)"},
    },
    summary="Return All Articles",
    description="Return All Articles available in Database",
)
async def list_articles(
    repository: ArticleRepository = Depends(get_article_repository),
) -> List[ArticleResponse]:
    return await article_service.list_articles(repository)


@router.get(
    "/articles/{article_id}",
    response_model=ArticleResponse,
    responses={
        400: {"description": "Article ID is not an integer", "model": ErrorResponse},
        404: {"description": "Not Found", "model": ErrorResponse},
        500: {"description": "Storage error (empty body)"},
    },
    summary="Return single Article",
    description="Return single Article by articleId",
)
async def get_article(
    article_id: int = Path(description="Article ID"),
    repository: ArticleRepository = Depends(get_article_repository),
) -> ArticleResponse:
    return await article_service.get_article(repository, article_id)


@router.post(
    "/articles",
    status_code=201,
    response_model=ArticleResponse,
    responses={
        400: {
            "description": "Malformed body, or required fields missing",
            "model": List[FieldErrorResponse],
        },
        500: {"description": "Storage error (empty body)"},
    },
    summary="Create a new Article",
    description="Create a new Article with the input payload",
)
async def create_article(
    payload: ArticlePayload,
    repository: ArticleRepository = Depends(get_article_repository),
) -> ArticleResponse:
    """
    Create an article.

    Both title and content are required; when either is missing the response
    lists every missing field and nothing is stored.
    """
    return await article_service.create_article(repository, payload)


@router.put(
    "/articles/{article_id}",
    response_model=ArticleResponse,
    responses={
        400: {"description": "Malformed body or article ID", "model": ErrorResponse},
        404: {"description": "Not Found", "model": ErrorResponse},
        500: {"description": "Storage error (empty body)"},
    },
    summary="Update an Article",
    description="Update an Article by article id",
)
async def update_article(
    payload: ArticlePayload,
    article_id: int = Path(description="Article ID"),
    repository: ArticleRepository = Depends(get_article_repository),
) -> ArticleResponse:
    return await article_service.update_article(repository, article_id, payload)


@router.delete(
    "/articles/{article_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"description": "Article ID is not an integer", "model": ErrorResponse},
        404: {"description": "Not Found", "model": ErrorResponse},
        500: {"description": "Storage error (empty body)"},
    },
    summary="Delete an Article",
    description="Delete an Article by article id",
)
async def delete_article(
    article_id: int = Path(description="Article ID"),
    repository: ArticleRepository = Depends(get_article_repository),
) -> Response:
    await article_service.delete_article(repository, article_id)
    return Response(status_code=204)

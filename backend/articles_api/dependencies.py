"""FastAPI dependency injection — hands the active repository to route handlers."""

from fastapi import Request

from articles_api.repositories.base import ArticleRepository


def get_article_repository(request: Request) -> ArticleRepository:
    """
    Return the repository built at startup.

    The lifespan (or create_app(repository=...) in tests) stores it on
    app.state; every request shares that one instance.
    """
    return request.app.state.article_repository

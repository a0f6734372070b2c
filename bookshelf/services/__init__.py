"""
Service layer for business logic.

Services encapsulate business logic, keeping routes as thin HTTP adapters.
Each service receives its dependencies via constructor injection.

Usage in routes:
    from ..services import ArticleServiceDep

    @router.get("/articles")
    async def list_articles(service: ArticleServiceDep):
        return service.browse()
"""

from typing import Annotated

from fastapi import Depends

from ..catalog import ArticleCatalog
from ..config import (
    config,
    state,
    get_catalog,
    get_chat_history,
    get_favorites,
    get_history,
    get_timer,
)
from ..ledgers import ChatHistoryLedger, FavoritesLedger, ReadingHistoryLedger
from ..timer import ReadingTimer

from .article_service import ArticleService
from .chat_service import ChatService
from .reading_service import ReadingService

__all__ = [
    # Services
    "ArticleService",
    "ChatService",
    "ReadingService",
    # Dependency factories
    "get_article_service",
    "get_chat_service",
    "get_reading_service",
    # Type aliases for dependency injection
    "ArticleServiceDep",
    "ChatServiceDep",
    "ReadingServiceDep",
]


def get_article_service(
    catalog: Annotated[ArticleCatalog, Depends(get_catalog)],
    favorites: Annotated[FavoritesLedger, Depends(get_favorites)],
) -> ArticleService:
    """Dependency to get ArticleService instance."""
    return ArticleService(
        catalog=catalog,
        favorites=favorites,
        page_size=config.PAGE_SIZE,
    )


def get_reading_service(
    history: Annotated[ReadingHistoryLedger, Depends(get_history)],
    favorites: Annotated[FavoritesLedger, Depends(get_favorites)],
    timer: Annotated[ReadingTimer, Depends(get_timer)],
) -> ReadingService:
    """Dependency to get ReadingService instance."""
    return ReadingService(
        history=history,
        favorites=favorites,
        timer=timer,
    )


def get_chat_service(
    catalog: Annotated[ArticleCatalog, Depends(get_catalog)],
    chat_history: Annotated[ChatHistoryLedger, Depends(get_chat_history)],
) -> ChatService:
    """Dependency to get ChatService instance."""
    return ChatService(
        catalog=catalog,
        history=chat_history,
        provider=state.provider,
    )


ArticleServiceDep = Annotated[ArticleService, Depends(get_article_service)]
ReadingServiceDep = Annotated[ReadingService, Depends(get_reading_service)]
ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]

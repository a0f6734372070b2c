"""
Article routes: bookshelf listing, search, detail and favorites.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from ..config import get_favorites
from ..exceptions import require_article
from ..ledgers import FavoritesLedger
from ..models import DifficultyLevel, Language
from ..query import SearchMode
from ..schemas import (
    ArticleDetailResponse,
    ArticlePageResponse,
    ArticleResponse,
    FavoriteResponse,
)
from ..services import ArticleServiceDep

router = APIRouter(prefix="/articles", tags=["articles"])


# ─────────────────────────────────────────────────────────────
# List & Favorites (static paths first)
# ─────────────────────────────────────────────────────────────

@router.get("")
async def list_articles(
    service: ArticleServiceDep,
    favorites: Annotated[FavoritesLedger, Depends(get_favorites)],
    q: str = "",
    mode: SearchMode = SearchMode.TITLE,
    language: Language = Language.EN,
    page: int = 1,
    page_size: int | None = Query(default=None, ge=1, le=100),
) -> ArticlePageResponse:
    """Search the catalog and return one page of results.

    Out-of-range pages are clamped to the nearest valid page.
    """
    result = service.browse(
        query=q,
        language=language.value,
        mode=mode,
        page=page,
        page_size=page_size,
    )
    return ArticlePageResponse.from_page(result, language.value, set(favorites.list()))


@router.get("/favorites")
async def list_favorite_articles(
    service: ArticleServiceDep,
    language: Language = Language.EN,
) -> list[ArticleResponse]:
    """Get favorite articles in catalog order."""
    return [
        ArticleResponse.from_article(a, language.value, is_favorite=True)
        for a in service.get_favorite_articles()
    ]


# ─────────────────────────────────────────────────────────────
# Single Article
# ─────────────────────────────────────────────────────────────

@router.get("/{article_id}")
async def get_article(
    article_id: int,
    service: ArticleServiceDep,
    language: Language = Language.EN,
    difficulty: DifficultyLevel = DifficultyLevel.BEGINNER,
) -> ArticleDetailResponse:
    """Get a localized article with the text for one difficulty tier."""
    article = require_article(service.get_article(article_id))
    return ArticleDetailResponse.from_article(
        article,
        language.value,
        is_favorite=service.is_favorite(article_id),
        difficulty=difficulty.value,
    )


@router.post("/{article_id}/favorite")
async def add_favorite(
    article_id: int,
    service: ArticleServiceDep,
    favorites: Annotated[FavoritesLedger, Depends(get_favorites)],
) -> FavoriteResponse:
    """Add an article to favorites. Adding twice is a no-op."""
    require_article(service.get_article(article_id))
    favorites.add(article_id)
    return FavoriteResponse(article_id=article_id, is_favorite=True)


@router.delete("/{article_id}/favorite")
async def remove_favorite(
    article_id: int,
    favorites: Annotated[FavoritesLedger, Depends(get_favorites)],
) -> FavoriteResponse:
    """Remove an article from favorites. Removing a non-favorite is a no-op."""
    favorites.remove(article_id)
    return FavoriteResponse(article_id=article_id, is_favorite=False)


@router.post("/{article_id}/favorite/toggle")
async def toggle_favorite(
    article_id: int,
    service: ArticleServiceDep,
    favorites: Annotated[FavoritesLedger, Depends(get_favorites)],
) -> FavoriteResponse:
    """Toggle favorite status. Returns new status."""
    require_article(service.get_article(article_id))
    return FavoriteResponse(article_id=article_id, is_favorite=favorites.toggle(article_id))

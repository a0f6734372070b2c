"""
Article service: catalog search, pagination and favorites.
"""

from ..catalog import ArticleCatalog
from ..ledgers import FavoritesLedger
from ..models import Article, Page
from ..query import SearchMode, paginate, search


class ArticleService:
    """Service for browsing the article catalog."""

    def __init__(
        self,
        catalog: ArticleCatalog,
        favorites: FavoritesLedger,
        page_size: int = 24,
    ):
        self.catalog = catalog
        self.favorites = favorites
        self.page_size = page_size

    def search(
        self,
        query: str = "",
        language: str = "en",
        mode: SearchMode | str = SearchMode.TITLE,
    ) -> list[Article]:
        """Filter the whole catalog with one search mode."""
        return search(self.catalog.all(), query, language, mode)

    def browse(
        self,
        query: str = "",
        language: str = "en",
        mode: SearchMode | str = SearchMode.TITLE,
        page: int = 1,
        page_size: int | None = None,
    ) -> Page:
        """Search, then return the requested (clamped) page."""
        results = self.search(query, language, mode)
        return paginate(results, page, page_size or self.page_size)

    def get_article(self, article_id: int) -> Article | None:
        return self.catalog.get_by_id(article_id)

    def get_favorite_articles(self) -> list[Article]:
        """Favorited articles in catalog order; ids no longer in the catalog are skipped."""
        return self.catalog.get_by_ids(self.favorites.list())

    def is_favorite(self, article_id: int) -> bool:
        return self.favorites.contains(article_id)

"""
Article catalog - immutable in-memory collection loaded once from a JSON dataset.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .models import Article, ArticleTranslation

logger = logging.getLogger(__name__)


def _text_map(value: Any) -> dict[str, str]:
    """Keep only string-valued tiers of a content mapping."""
    if not isinstance(value, dict):
        return {}
    return {str(tier): text for tier, text in value.items() if isinstance(text, str)}


def dict_to_translation(data: dict) -> ArticleTranslation:
    """Convert a raw translation bundle to an ArticleTranslation."""
    return ArticleTranslation(
        title=data.get("title") or None,
        author=data.get("author") or None,
        category=data.get("category") or None,
        content=_text_map(data.get("content")),
        summary=data.get("summary") or None,
    )


def dict_to_article(data: dict) -> Article:
    """Convert a raw dataset record to an Article.

    Raises KeyError/ValueError/TypeError for records missing required fields.
    """
    article_id = int(data["id"])
    if article_id <= 0:
        raise ValueError(f"Article id must be positive, got {article_id}")

    translations = {}
    for language, bundle in (data.get("translations") or {}).items():
        if isinstance(bundle, dict):
            translations[language] = dict_to_translation(bundle)

    return Article(
        id=article_id,
        title=data["title"],
        author=data.get("author", ""),
        date=data.get("date", ""),
        category=data.get("category", ""),
        cover_color=data.get("coverColor", ""),
        content=_text_map(data["content"]),
        translations=translations,
    )


class ArticleCatalog:
    """Read-only article collection preserving dataset order."""

    def __init__(self, articles: Iterable[Article]):
        ordered: list[Article] = []
        by_id: dict[int, Article] = {}
        for article in articles:
            if article.id in by_id:
                logger.warning(f"Duplicate article id {article.id} in catalog, keeping first")
                continue
            by_id[article.id] = article
            ordered.append(article)

        self._articles = tuple(ordered)
        self._by_id = by_id

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "ArticleCatalog":
        """Build a catalog from raw dataset records, skipping malformed ones."""
        articles = []
        for record in records:
            try:
                articles.append(dict_to_article(record))
            except (KeyError, ValueError, TypeError) as e:
                logger.warning(f"Skipping malformed article record: {e!r}")
        return cls(articles)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "ArticleCatalog":
        """Load the catalog from a bundled JSON file (a list of records)."""
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            records = json.load(f)

        catalog = cls.from_records(records)
        logger.info(f"Loaded {len(catalog)} articles from {path}")
        return catalog

    def __len__(self) -> int:
        return len(self._articles)

    def __iter__(self):
        return iter(self._articles)

    def all(self) -> list[Article]:
        """Get all articles in catalog order."""
        return list(self._articles)

    def get_by_id(self, article_id: int) -> Article | None:
        return self._by_id.get(article_id)

    def get_by_ids(self, ids: Iterable[int]) -> list[Article]:
        """Get articles whose id is in ids, in catalog order. Unknown ids are dropped."""
        wanted = set(ids)
        return [article for article in self._articles if article.id in wanted]

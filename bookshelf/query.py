"""
Query engine - search, localization and pagination over catalog articles.

All functions are pure: the article list is read-only input and nothing here
raises for empty queries, missing translations or out-of-range pages.
"""

import math
from collections.abc import Iterator, Sequence
from enum import Enum

from .models import BASE_DIFFICULTY, Article, Page


class SearchMode(str, Enum):
    """Which localized field a search matches against."""
    TITLE = "title"
    AUTHOR = "author"
    CONTENT = "content"


# ─────────────────────────────────────────────────────────────
# Localization
# ─────────────────────────────────────────────────────────────

def _field_sources(article: Article, language: str) -> Iterator[object]:
    """Objects to consult for a display field, most specific first."""
    translation = article.translation(language)
    if translation is not None:
        yield translation
    yield article


def resolve_field(article: Article, language: str, field: str) -> str:
    """Return the first populated value of field along the fallback chain."""
    for source in _field_sources(article, language):
        value = getattr(source, field, None)
        if value:
            return value
    return ""


def content_candidates(article: Article, language: str, tier: str) -> Iterator[str | None]:
    """Content lookups in resolution order.

    translated[tier] -> default[tier] -> translated[base] -> default[base]
    """
    translation = article.translation(language)
    translated = translation.content if translation is not None else {}

    yield translated.get(tier)
    yield article.content.get(tier)
    yield translated.get(BASE_DIFFICULTY)
    yield article.content.get(BASE_DIFFICULTY)


def get_localized_title(article: Article, language: str) -> str:
    return resolve_field(article, language, "title")


def get_localized_author(article: Article, language: str) -> str:
    return resolve_field(article, language, "author")


def get_localized_category(article: Article, language: str) -> str:
    return resolve_field(article, language, "category")


def get_localized_summary(article: Article, language: str) -> str | None:
    """Translated summary, if the bundle carries one."""
    translation = article.translation(language)
    if translation is None:
        return None
    return translation.summary


def get_localized_content(article: Article, language: str, tier: str) -> str:
    """Resolve article text for a tier, falling back per tier then to the base tier."""
    for text in content_candidates(article, language, tier):
        if text:
            return text
    return ""


def available_tiers(article: Article, language: str) -> list[str]:
    """Tiers with text in either the default content or the translation."""
    tiers = list(article.content)
    translation = article.translation(language)
    if translation is not None:
        tiers.extend(t for t in translation.content if t not in tiers)
    return tiers


# ─────────────────────────────────────────────────────────────
# Search
# ─────────────────────────────────────────────────────────────

def _normalize(query: str) -> str | None:
    """Lower-cased query, or None when it is blank."""
    if not query or not query.strip():
        return None
    return query.lower()


def search_by_title(articles: Sequence[Article], query: str, language: str) -> list[Article]:
    """Case-insensitive substring match against the localized title."""
    needle = _normalize(query)
    if needle is None:
        return list(articles)
    return [a for a in articles if needle in get_localized_title(a, language).lower()]


def search_by_author(articles: Sequence[Article], query: str, language: str) -> list[Article]:
    """Case-insensitive substring match against the localized author."""
    needle = _normalize(query)
    if needle is None:
        return list(articles)
    return [a for a in articles if needle in get_localized_author(a, language).lower()]


def _content_matches(article: Article, needle: str, language: str) -> bool:
    for tier in available_tiers(article, language):
        if needle in get_localized_content(article, language, tier).lower():
            return True
    return False


def search_with_content(articles: Sequence[Article], query: str, language: str) -> list[Article]:
    """Title match OR the query appears in any localized content tier."""
    needle = _normalize(query)
    if needle is None:
        return list(articles)

    results = []
    for article in articles:
        if needle in get_localized_title(article, language).lower():
            results.append(article)
        elif _content_matches(article, needle, language):
            results.append(article)
    return results


_SEARCHERS = {
    SearchMode.TITLE: search_by_title,
    SearchMode.AUTHOR: search_by_author,
    SearchMode.CONTENT: search_with_content,
}


def search(
    articles: Sequence[Article],
    query: str,
    language: str,
    mode: SearchMode | str = SearchMode.TITLE,
) -> list[Article]:
    """Run exactly one search mode over the articles."""
    return _SEARCHERS[SearchMode(mode)](articles, query, language)


# ─────────────────────────────────────────────────────────────
# Pagination
# ─────────────────────────────────────────────────────────────

def paginate(articles: Sequence[Article], page: int, page_size: int) -> Page:
    """Slice one page, clamping the requested page into [1, total_pages]."""
    page_size = max(1, page_size)
    total_articles = len(articles)
    total_pages = max(1, math.ceil(total_articles / page_size))
    current_page = min(max(page, 1), total_pages)

    start = (current_page - 1) * page_size
    return Page(
        articles=list(articles[start:start + page_size]),
        current_page=current_page,
        total_pages=total_pages,
        total_articles=total_articles,
    )

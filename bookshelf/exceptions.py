"""
HTTP exception utilities for common error patterns.

The catalog and ledgers report absence as None; routes turn that into 404s here.
"""

from typing import TypeVar

from fastapi import HTTPException

T = TypeVar("T")


def require_resource(resource: T | None, detail: str = "Resource not found") -> T:
    """
    Raise 404 if resource is None, otherwise return the resource.

    Usage:
        article = require_resource(catalog.get_by_id(id), "Article not found")
    """
    if resource is None:
        raise HTTPException(status_code=404, detail=detail)
    return resource


def require_article(article: T | None) -> T:
    """Raise 404 if article is None."""
    return require_resource(article, "Article not found")


def require_history_entry(entry: T | None) -> T:
    """Raise 404 if no reading history exists for the article."""
    return require_resource(entry, "No reading history for article")

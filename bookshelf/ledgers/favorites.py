"""
Favorites ledger - persisted set of favorite article ids.
"""

from typing import Any

from .base import Ledger


class FavoritesLedger(Ledger[set[int]]):
    """Set of favorite article ids. Every operation is idempotent."""

    key = "favorites-storage"

    def empty(self) -> set[int]:
        return set()

    def serialize(self, state: set[int]) -> list[int]:
        return sorted(state)

    def deserialize(self, data: Any) -> set[int]:
        if not isinstance(data, list):
            raise TypeError(f"Expected a list of ids, got {type(data).__name__}")
        return {int(article_id) for article_id in data}

    def add(self, article_id: int) -> None:
        if article_id in self._state:
            return
        self._state.add(article_id)
        self._save()

    def remove(self, article_id: int) -> None:
        if article_id not in self._state:
            return
        self._state.discard(article_id)
        self._save()

    def toggle(self, article_id: int) -> bool:
        """Flip favorite status. Returns new status."""
        if article_id in self._state:
            self.remove(article_id)
            return False
        self.add(article_id)
        return True

    def contains(self, article_id: int) -> bool:
        return article_id in self._state

    def list(self) -> list[int]:
        return list(self._state)

    def count(self) -> int:
        return len(self._state)

    __contains__ = contains

    def __len__(self) -> int:
        return len(self._state)

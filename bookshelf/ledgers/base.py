"""
Base class for persisted ledgers.

A ledger keeps its whole state in memory, loads it once from a storage
backend at construction and writes it back after every mutation.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from ..storage import StorageBackend, StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Ledger(ABC, Generic[T]):
    """Persisted in-memory state with an explicit serializer pair."""

    # Storage key, one per ledger type
    key: str

    def __init__(self, storage: StorageBackend):
        self._storage = storage
        self._state: T = self._load()

    @abstractmethod
    def empty(self) -> T:
        """Fresh empty state."""
        pass

    @abstractmethod
    def serialize(self, state: T) -> Any:
        """Convert state to a JSON-friendly value."""
        pass

    @abstractmethod
    def deserialize(self, data: Any) -> T:
        """Rebuild state from a decoded JSON value.

        May raise ValueError, TypeError or KeyError for malformed data.
        """
        pass

    def _load(self) -> T:
        """Read persisted state, degrading to empty on any failure."""
        try:
            raw = self._storage.get(self.key)
        except StorageError as e:
            logger.warning(f"Could not read '{self.key}', starting empty: {e}")
            return self.empty()

        if raw is None:
            return self.empty()

        try:
            return self.deserialize(json.loads(raw))
        except (
            ValueError, TypeError, KeyError, AttributeError, ArithmeticError, RecursionError
        ) as e:
            logger.warning(f"Discarding corrupt state for '{self.key}': {e!r}")
            return self.empty()

    def _save(self) -> None:
        """Persist current state; failures are logged, never raised."""
        try:
            self._storage.set(self.key, json.dumps(self.serialize(self._state)))
        except (StorageError, TypeError, ValueError) as e:
            logger.warning(f"Could not persist '{self.key}': {e}")

    def reload(self) -> None:
        """Re-read state from storage."""
        self._state = self._load()

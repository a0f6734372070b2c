"""
Reading history ledger - per-article time spent and progress.
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable

from ..models import ReadingHistoryEntry
from ..storage import StorageBackend
from .base import Ledger

logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_STEP = 5
MAX_PROGRESS = 100


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def entry_to_dict(entry: ReadingHistoryEntry) -> dict:
    """Convert an entry to its persisted (camelCase) form."""
    return {
        "articleId": entry.article_id,
        "lastReadDate": entry.last_read_date,
        "timeSpentSeconds": entry.time_spent_seconds,
        "lastDifficultyLevel": entry.last_difficulty_level,
        "progress": entry.progress,
    }


def dict_to_entry(data: dict) -> ReadingHistoryEntry:
    """Convert a persisted entry back to a ReadingHistoryEntry."""
    return ReadingHistoryEntry(
        article_id=int(data["articleId"]),
        last_read_date=str(data["lastReadDate"]),
        time_spent_seconds=max(0, int(data["timeSpentSeconds"])),
        last_difficulty_level=str(data["lastDifficultyLevel"]),
        progress=min(MAX_PROGRESS, max(0, int(data["progress"]))),
    )


class ReadingHistoryLedger(Ledger[dict[int, ReadingHistoryEntry]]):
    """Map of article id to reading stats."""

    key = "reading-history-storage"

    def __init__(
        self,
        storage: StorageBackend,
        progress_step: int = DEFAULT_PROGRESS_STEP,
        now: Callable[[], str] = _utc_now_iso,
    ):
        self.progress_step = progress_step
        self._now = now
        super().__init__(storage)

    def empty(self) -> dict[int, ReadingHistoryEntry]:
        return {}

    def serialize(self, state: dict[int, ReadingHistoryEntry]) -> dict[str, dict]:
        return {str(article_id): entry_to_dict(entry) for article_id, entry in state.items()}

    def deserialize(self, data: Any) -> dict[int, ReadingHistoryEntry]:
        if not isinstance(data, dict):
            raise TypeError(f"Expected an object keyed by article id, got {type(data).__name__}")

        history = {}
        for key, value in data.items():
            try:
                entry = dict_to_entry(value)
            except (KeyError, ValueError, TypeError, OverflowError) as e:
                logger.warning(f"Skipping malformed history entry {key!r}: {e!r}")
                continue
            history[entry.article_id] = entry
        return history

    # ─────────────────────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────────────────────

    def start_reading(self, article_id: int, difficulty_level: str) -> ReadingHistoryEntry:
        """Open a session: create the entry or refresh its date and tier."""
        existing = self._state.get(article_id)
        if existing:
            entry = replace(
                existing,
                last_read_date=self._now(),
                last_difficulty_level=difficulty_level,
            )
        else:
            entry = ReadingHistoryEntry(
                article_id=article_id,
                last_read_date=self._now(),
                time_spent_seconds=0,
                last_difficulty_level=difficulty_level,
                progress=0,
            )

        self._state[article_id] = entry
        self._save()
        return entry

    def record_elapsed(self, article_id: int, seconds: int) -> ReadingHistoryEntry | None:
        """Add reading time and bump progress.

        Does nothing if no session was ever started for the article or if
        seconds is less than one whole second.
        """
        seconds = int(seconds)
        existing = self._state.get(article_id)
        if existing is None or seconds <= 0:
            return existing

        entry = replace(
            existing,
            time_spent_seconds=existing.time_spent_seconds + seconds,
            progress=min(MAX_PROGRESS, existing.progress + self.progress_step),
        )
        self._state[article_id] = entry
        self._save()
        return entry

    def clear(self) -> int:
        """Remove all history. Returns number of entries removed."""
        removed = len(self._state)
        self._state = self.empty()
        self._save()
        return removed

    # ─────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────

    def get_entry(self, article_id: int) -> ReadingHistoryEntry | None:
        return self._state.get(article_id)

    def list_all(self) -> list[ReadingHistoryEntry]:
        return list(self._state.values())

    def total_time_spent(self) -> int:
        return sum(entry.time_spent_seconds for entry in self._state.values())

    def unique_articles_read(self) -> int:
        return len(self._state)

    def __len__(self) -> int:
        return len(self._state)

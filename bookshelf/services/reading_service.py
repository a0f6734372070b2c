"""
Reading service: sessions, history and reading statistics.
"""

from ..ledgers import FavoritesLedger, ReadingHistoryLedger
from ..models import DifficultyLevel, ReadingHistoryEntry, UserStatistics
from ..timer import ReadingTimer


class ReadingService:
    """Ties the reading timer to the history ledger."""

    def __init__(
        self,
        history: ReadingHistoryLedger,
        favorites: FavoritesLedger,
        timer: ReadingTimer,
    ):
        self.history = history
        self.favorites = favorites
        self.timer = timer

    def open_article(self, article_id: int, difficulty_level: str) -> ReadingHistoryEntry:
        """
        Start (or resume) reading an article.

        Records the session in history, then binds the timer. Binding flushes
        the time of whichever article was open before.
        """
        entry = self.history.start_reading(article_id, difficulty_level)
        self.timer.bind(article_id, is_active=True)
        return entry

    def close_article(self) -> int:
        """Unbind the timer. Returns the seconds flushed on close."""
        return self.timer.unbind()

    def get_statistics(self) -> UserStatistics:
        entries = self.history.list_all()

        by_difficulty = {level.value: 0 for level in DifficultyLevel}
        for entry in entries:
            by_difficulty[entry.last_difficulty_level] = (
                by_difficulty.get(entry.last_difficulty_level, 0) + 1
            )

        last_read = max((e.last_read_date for e in entries), default=None)

        return UserStatistics(
            total_articles_read=self.history.unique_articles_read(),
            total_time_spent_seconds=self.history.total_time_spent(),
            favorite_count=self.favorites.count(),
            last_read_date=last_read,
            articles_read_by_difficulty=by_difficulty,
        )

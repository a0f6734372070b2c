"""
Reading timer - accumulates time spent on the open article.

A timer is bound to at most one article at a time. While bound it wakes up
periodically and flushes whole elapsed seconds into the reading history
once they reach the flush threshold. Unbinding (or binding another
article) flushes whatever is left, so no second is lost or counted twice.
"""

import asyncio
import logging
import time
from typing import Callable

from .ledgers import ReadingHistoryLedger

logger = logging.getLogger(__name__)

DEFAULT_FLUSH_SECONDS = 10
DEFAULT_TICK_INTERVAL = 1.0


class ReadingTimer:
    """Per-surface reading clock bound to a single article."""

    def __init__(
        self,
        history: ReadingHistoryLedger,
        flush_seconds: int = DEFAULT_FLUSH_SECONDS,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._history = history
        self.flush_seconds = max(1, flush_seconds)
        self.tick_interval = tick_interval
        self._clock = clock

        self._article_id: int | None = None
        self._started_at: float | None = None
        self._task: asyncio.Task | None = None

    @property
    def article_id(self) -> int | None:
        return self._article_id

    @property
    def is_bound(self) -> bool:
        return self._article_id is not None

    @property
    def is_ticking(self) -> bool:
        return self._task is not None and not self._task.done()

    def pending_seconds(self) -> int:
        """Whole seconds accumulated since the last flush."""
        if self._started_at is None:
            return 0
        return max(0, int(self._clock() - self._started_at))

    def bind(self, article_id: int | None, is_active: bool = True) -> None:
        """Bind to an article, flushing any previous binding first.

        Binding None, or with is_active False, just unbinds. Re-binding the
        article that is already active keeps its running clock.
        """
        if article_id is None or not is_active:
            self.unbind()
            return

        if article_id == self._article_id:
            return

        self.unbind()
        self._article_id = article_id
        self._started_at = self._clock()
        self.start()
        logger.debug(f"Reading timer bound to article {article_id}")

    def unbind(self) -> int:
        """Stop ticking and flush the remaining partial time. Returns seconds flushed."""
        if self._article_id is None:
            return 0

        self._stop_ticking()
        remaining = self.pending_seconds()
        if remaining > 0:
            self._flush(remaining)

        logger.debug(f"Reading timer unbound from article {self._article_id}")
        self._article_id = None
        self._started_at = None
        return remaining

    def tick(self) -> int:
        """Flush if the threshold was reached. Returns seconds flushed."""
        if self._article_id is None:
            return 0

        elapsed = self.pending_seconds()
        if elapsed < self.flush_seconds:
            return 0

        self._flush(elapsed)
        return elapsed

    def _flush(self, seconds: int) -> None:
        self._history.record_elapsed(self._article_id, seconds)
        # Advance by exactly what was recorded so fractions carry over
        self._started_at += seconds

    # ─────────────────────────────────────────────────────────────
    # Periodic wake-up
    # ─────────────────────────────────────────────────────────────

    async def run(self) -> None:
        """Tick forever; cancelled by unbind or stop."""
        while True:
            await asyncio.sleep(self.tick_interval)
            self.tick()

    def start(self) -> None:
        """Start the periodic task if an event loop is running and none is active."""
        if self.is_ticking:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop: the caller drives tick() directly
            return
        self._task = loop.create_task(self.run())

    def _stop_ticking(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def stop(self) -> int:
        """Cancel the periodic task, wait for it to finish and flush."""
        task = self._task
        flushed = self.unbind()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass
        return flushed

"""
Reading routes: sessions, history and statistics.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from ..config import get_catalog, get_history
from ..catalog import ArticleCatalog
from ..exceptions import require_article, require_history_entry
from ..ledgers import ReadingHistoryLedger
from ..schemas import (
    ReadingHistoryResponse,
    ReadingSessionResponse,
    RecordElapsedRequest,
    StartReadingRequest,
    UserStatisticsResponse,
)
from ..services import ReadingServiceDep

router = APIRouter(prefix="/reading", tags=["reading"])


# ─────────────────────────────────────────────────────────────
# Sessions
# ─────────────────────────────────────────────────────────────

@router.post("/{article_id}/start")
async def start_reading(
    article_id: int,
    request: StartReadingRequest,
    service: ReadingServiceDep,
    catalog: Annotated[ArticleCatalog, Depends(get_catalog)],
) -> ReadingSessionResponse:
    """Open an article: record the session and start the reading timer.

    Time accumulated on a previously open article is flushed first.
    """
    require_article(catalog.get_by_id(article_id))
    entry = service.open_article(article_id, request.difficulty.value)
    return ReadingSessionResponse(
        article_id=article_id,
        entry=ReadingHistoryResponse.from_entry(entry),
    )


@router.delete("/session")
async def end_session(service: ReadingServiceDep) -> ReadingSessionResponse:
    """Close the open article and flush its remaining time."""
    article_id = service.timer.article_id
    flushed = service.close_article()
    entry = service.history.get_entry(article_id) if article_id is not None else None
    return ReadingSessionResponse(
        article_id=article_id,
        flushed_seconds=flushed,
        entry=ReadingHistoryResponse.from_entry(entry) if entry else None,
    )


@router.post("/{article_id}/elapsed")
async def record_elapsed(
    article_id: int,
    request: RecordElapsedRequest,
    history: Annotated[ReadingHistoryLedger, Depends(get_history)],
) -> ReadingHistoryResponse:
    """Add reading time reported by the client.

    Returns 404 if reading was never started for the article.
    """
    entry = require_history_entry(history.record_elapsed(article_id, request.seconds))
    return ReadingHistoryResponse.from_entry(entry)


# ─────────────────────────────────────────────────────────────
# History & Stats
# ─────────────────────────────────────────────────────────────

@router.get("/history")
async def list_history(
    history: Annotated[ReadingHistoryLedger, Depends(get_history)],
) -> list[ReadingHistoryResponse]:
    """Get all history entries, most recently read first."""
    entries = sorted(history.list_all(), key=lambda e: e.last_read_date, reverse=True)
    return [ReadingHistoryResponse.from_entry(e) for e in entries]


@router.get("/history/{article_id}")
async def get_history_entry(
    article_id: int,
    history: Annotated[ReadingHistoryLedger, Depends(get_history)],
) -> ReadingHistoryResponse:
    entry = require_history_entry(history.get_entry(article_id))
    return ReadingHistoryResponse.from_entry(entry)


@router.delete("/history")
async def clear_history(service: ReadingServiceDep) -> dict:
    """Clear all reading history.

    The open session, if any, is closed first so its time is not re-added.
    """
    service.close_article()
    removed = service.history.clear()
    return {"success": True, "removed": removed}


@router.get("/stats")
async def get_statistics(service: ReadingServiceDep) -> UserStatisticsResponse:
    """Get reading statistics."""
    return UserStatisticsResponse.from_stats(service.get_statistics())

"""
Bookshelf API Server

FastAPI application providing endpoints for:
- Article catalog (search, pagination, localized detail)
- Favorites
- Reading sessions, history and statistics
- Assistant chat
- Settings

Run with: uvicorn bookshelf.server:app --port 5005
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .catalog import ArticleCatalog
from .config import config, state
from .ledgers import ChatHistoryLedger, FavoritesLedger, ReadingHistoryLedger, SettingsLedger
from .providers import get_provider_from_env
from .routes import (
    articles_router,
    chat_router,
    misc_router,
    reading_router,
)
from .storage import MemoryStorage, StorageError, create_storage
from .timer import ReadingTimer

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


def init_state() -> None:
    """Build the catalog, ledgers, timer and provider from configuration."""
    state.catalog = ArticleCatalog.from_json_file(config.ARTICLES_PATH)
    try:
        state.storage = create_storage(config.STORAGE_BACKEND, config.STORAGE_PATH)
    except StorageError as e:
        logger.warning(f"Could not open {config.STORAGE_BACKEND} storage, using memory: {e}")
        state.storage = MemoryStorage()

    state.favorites = FavoritesLedger(state.storage)
    state.history = ReadingHistoryLedger(
        state.storage,
        progress_step=config.READING_PROGRESS_STEP,
    )
    state.chat_history = ChatHistoryLedger(state.storage, limit=config.CHAT_HISTORY_LIMIT)
    state.settings = SettingsLedger(state.storage)
    state.timer = ReadingTimer(state.history, flush_seconds=config.READING_FLUSH_SECONDS)

    state.provider = get_provider_from_env(
        google_keys=config.GOOGLE_API_KEYS,
        default_model=config.LLM_MODEL or None,
    )
    if state.provider:
        logger.info(f"LLM provider initialized: {state.provider.name}")
    else:
        logger.warning("No LLM API key configured. Set GOOGLE_API_KEY. Chat disabled.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup application resources."""
    # Startup - skip if already initialized (e.g., by tests)
    if state.catalog is None:
        init_state()

    yield

    # Shutdown - flush the open reading session
    if state.timer is not None:
        flushed = await state.timer.stop()
        if flushed:
            logger.info(f"Flushed {flushed}s of reading time on shutdown")


app = FastAPI(
    title="Bookshelf API",
    version=__version__,
    lifespan=lifespan
)

# Include routers
app.include_router(misc_router)
app.include_router(articles_router)
app.include_router(reading_router)
app.include_router(chat_router)

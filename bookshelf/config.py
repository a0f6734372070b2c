"""
Configuration and application state management.
"""

import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from fastapi import HTTPException

if TYPE_CHECKING:
    from .catalog import ArticleCatalog
    from .ledgers import ChatHistoryLedger, FavoritesLedger, ReadingHistoryLedger, SettingsLedger
    from .providers import LLMProvider
    from .storage import StorageBackend
    from .timer import ReadingTimer

# Load environment variables
load_dotenv()

BUNDLED_ARTICLES_PATH = Path(__file__).parent / "data" / "articles.json"


def _parse_keys(*values: str | None) -> list[str]:
    """Collect non-empty API keys, dropping duplicates but keeping order."""
    keys: list[str] = []
    for value in values:
        if value and value not in keys:
            keys.append(value)
    return keys


class Config:
    """Application configuration from environment."""
    ARTICLES_PATH: Path = Path(os.getenv("ARTICLES_PATH", str(BUNDLED_ARTICLES_PATH)))

    # Storage backend: "sqlite", "file" or "memory"
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "sqlite")
    STORAGE_PATH: Path = Path(os.getenv("STORAGE_PATH", "./data/bookshelf.db"))

    # Gemini keys are tried in order; a failing key falls through to the next
    GOOGLE_API_KEYS: list[str] = _parse_keys(
        os.getenv("GOOGLE_API_KEY"),
        os.getenv("GOOGLE_API_KEY_1"),
        os.getenv("GOOGLE_API_KEY_2"),
        os.getenv("GOOGLE_API_KEY_3"),
        os.getenv("GOOGLE_API_KEY_4"),
    )
    LLM_MODEL: str = os.getenv("LLM_MODEL", "")

    PAGE_SIZE: int = int(os.getenv("PAGE_SIZE", "24"))
    READING_FLUSH_SECONDS: int = int(os.getenv("READING_FLUSH_SECONDS", "10"))
    READING_PROGRESS_STEP: int = int(os.getenv("READING_PROGRESS_STEP", "5"))
    CHAT_HISTORY_LIMIT: int = int(os.getenv("CHAT_HISTORY_LIMIT", "10"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


config = Config()


class AppState:
    """Shared application state."""
    catalog: "ArticleCatalog | None" = None
    storage: "StorageBackend | None" = None
    favorites: "FavoritesLedger | None" = None
    history: "ReadingHistoryLedger | None" = None
    chat_history: "ChatHistoryLedger | None" = None
    settings: "SettingsLedger | None" = None
    timer: "ReadingTimer | None" = None
    provider: "LLMProvider | None" = None


state = AppState()


def get_catalog() -> "ArticleCatalog":
    """Dependency to get the article catalog."""
    if state.catalog is None:
        raise HTTPException(status_code=500, detail="Catalog not initialized")
    return state.catalog


def get_favorites() -> "FavoritesLedger":
    """Dependency to get the favorites ledger."""
    if state.favorites is None:
        raise HTTPException(status_code=500, detail="Favorites not initialized")
    return state.favorites


def get_history() -> "ReadingHistoryLedger":
    """Dependency to get the reading history ledger."""
    if state.history is None:
        raise HTTPException(status_code=500, detail="Reading history not initialized")
    return state.history


def get_chat_history() -> "ChatHistoryLedger":
    """Dependency to get the chat history ledger."""
    if state.chat_history is None:
        raise HTTPException(status_code=500, detail="Chat history not initialized")
    return state.chat_history


def get_settings() -> "SettingsLedger":
    """Dependency to get the settings ledger."""
    if state.settings is None:
        raise HTTPException(status_code=500, detail="Settings not initialized")
    return state.settings


def get_timer() -> "ReadingTimer":
    """Dependency to get the reading timer."""
    if state.timer is None:
        raise HTTPException(status_code=500, detail="Reading timer not initialized")
    return state.timer

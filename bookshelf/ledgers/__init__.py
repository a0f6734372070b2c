"""
Persisted ledgers - favorites, reading history, chat history and settings.

Each ledger serializes its whole state under one storage key.
"""

from .base import Ledger
from .chat_history import ChatHistoryLedger, bucket_key
from .favorites import FavoritesLedger
from .reading_history import ReadingHistoryLedger
from .settings import Settings, SettingsLedger

__all__ = [
    "Ledger",
    "ChatHistoryLedger",
    "FavoritesLedger",
    "ReadingHistoryLedger",
    "Settings",
    "SettingsLedger",
    "bucket_key",
]

"""
Tests for application startup.
"""

import pytest

from bookshelf.config import config, state
from bookshelf.server import init_state
from bookshelf.storage import MemoryStorage, SQLiteStorage

STATE_FIELDS = (
    "catalog", "storage", "favorites", "history",
    "chat_history", "settings", "timer", "provider",
)


@pytest.fixture
def fresh_state(monkeypatch):
    """Empty app state, restored after the test."""
    for name in STATE_FIELDS:
        monkeypatch.setattr(state, name, None)
    monkeypatch.setattr(config, "GOOGLE_API_KEYS", [])
    monkeypatch.setattr(config, "STORAGE_BACKEND", "sqlite")


def test_init_state_with_sqlite(fresh_state, monkeypatch, tmp_path):
    monkeypatch.setattr(config, "STORAGE_PATH", tmp_path / "bookshelf.db")

    init_state()

    assert isinstance(state.storage, SQLiteStorage)
    assert len(state.catalog) > 0
    assert state.provider is None


def test_corrupt_database_falls_back_to_memory(fresh_state, monkeypatch, tmp_path):
    db_path = tmp_path / "bookshelf.db"
    db_path.write_bytes(b"this is not a database" * 100)
    monkeypatch.setattr(config, "STORAGE_PATH", db_path)

    init_state()

    assert isinstance(state.storage, MemoryStorage)
    assert state.favorites.list() == []
    state.favorites.add(1)
    assert state.favorites.contains(1)

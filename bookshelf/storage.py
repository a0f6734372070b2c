"""
Storage - durable key-value backends for persisted ledgers.

Provides:
- MemoryStorage: process-local dict, nothing survives a restart
- FileStorage: one file per key in a directory
- SQLiteStorage: a single key/value table in an SQLite database

Values are opaque strings; each ledger owns its own serialization.
"""

import logging
import re
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """A backend could not read or write a value."""


class StorageBackend(ABC):
    """Abstract base class for key-value storage backends."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Get the stored value for key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Removing an absent key is not an error."""
        pass


class MemoryStorage(StorageBackend):
    """In-memory storage, mostly for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage(StorageBackend):
    """Stores each key as a file in a directory."""

    _SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]")

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _key_to_path(self, key: str) -> Path:
        """Convert a storage key to a file path."""
        return self.directory / f"{self._SAFE_KEY.sub('_', key)}.json"

    def get(self, key: str) -> str | None:
        path = self._key_to_path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self._key_to_path(key)
        tmp_path = path.with_suffix(".tmp")
        try:
            # Write then rename so a crash never leaves a half-written value
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self._key_to_path(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete {key}: {e}") from e


class SQLiteStorage(StorageBackend):
    """Stores keys in a single SQLite table."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    @contextmanager
    def conn(self) -> Iterator[sqlite3.Connection]:
        """Get database connection with row factory."""
        try:
            connection = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageError(f"Failed to open {self.db_path}: {e}") from e
        connection.row_factory = sqlite3.Row
        try:
            yield connection
            connection.commit()
        except sqlite3.Error as e:
            raise StorageError(f"SQLite error on {self.db_path}: {e}") from e
        finally:
            connection.close()

    def _init_schema(self):
        """Initialize database schema."""
        with self.conn() as connection:
            connection.executescript("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                );
            """)

    def get(self, key: str) -> str | None:
        with self.conn() as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
            return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        with self.conn() as conn:
            conn.execute(
                """INSERT INTO kv_store (key, value, updated_at)
                   VALUES (?, ?, ?)
                   ON CONFLICT(key) DO UPDATE SET
                   value = excluded.value, updated_at = excluded.updated_at""",
                (key, value, datetime.now().isoformat())
            )

    def delete(self, key: str) -> None:
        with self.conn() as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))


def create_storage(backend: str, path: str | Path) -> StorageBackend:
    """Factory function to create a storage backend by name."""
    backend = backend.lower()
    if backend == "sqlite":
        return SQLiteStorage(Path(path))
    if backend == "file":
        return FileStorage(Path(path))
    if backend == "memory":
        return MemoryStorage()
    raise ValueError(f"Unknown storage backend: {backend}. Available: sqlite, file, memory")

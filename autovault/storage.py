"""
Storage Backend Module

Provides abstract key/value storage interface and implementations for
in-memory (testing) and SQLite (persistence). Values are opaque strings;
serialization is the caller's concern.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Union
from datetime import datetime, timezone
import sqlite3
import threading
from pathlib import Path


MEMORY_SCHEME = "memory://"
SQLITE_SCHEME = "sqlite:///"


class StorageInterface(ABC):
    """Abstract interface for key/value storage backends"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Read the value stored under key"""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Write value under key, replacing any previous value"""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete key, returning whether it existed"""
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check if a key is present"""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close storage connection"""
        pass


class InMemoryStorage(StorageInterface):
    """In-memory storage implementation for testing"""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> bool:
        with self._lock:
            if key in self._data:
                del self._data[key]
                return True
            return False

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def close(self) -> None:
        """Close storage (no-op for in-memory)"""
        pass


class SQLiteStorage(StorageInterface):
    """SQLite storage implementation for persistence"""

    TABLE = "kv_store"

    def __init__(self, db_path: Union[str, Path] = ":memory:"):
        self.db_path = str(db_path)
        self._connection = sqlite3.connect(self.db_path, check_same_thread=False)
        self._connection.row_factory = sqlite3.Row
        self._lock = threading.RLock()

        with self._lock:
            # Enable WAL mode for better concurrent access
            if self.db_path != ":memory:":
                self._connection.execute("PRAGMA journal_mode = WAL")
                self._connection.execute("PRAGMA synchronous = NORMAL")
            self._connection.execute(f"""
                CREATE TABLE IF NOT EXISTS {self.TABLE} (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            self._connection.commit()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            cursor = self._connection.execute(f"""
                SELECT value FROM {self.TABLE} WHERE key = ?
            """, (key,))
            row = cursor.fetchone()
            if row:
                return row['value']
            return None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            now = datetime.now(timezone.utc).isoformat()
            self._connection.execute(f"""
                INSERT OR REPLACE INTO {self.TABLE} (key, value, updated_at)
                VALUES (?, ?, ?)
            """, (key, value, now))
            self._connection.commit()

    def delete(self, key: str) -> bool:
        with self._lock:
            cursor = self._connection.execute(f"""
                DELETE FROM {self.TABLE} WHERE key = ?
            """, (key,))
            self._connection.commit()
            return cursor.rowcount > 0

    def exists(self, key: str) -> bool:
        with self._lock:
            cursor = self._connection.execute(f"""
                SELECT 1 FROM {self.TABLE} WHERE key = ? LIMIT 1
            """, (key,))
            return cursor.fetchone() is not None

    def close(self) -> None:
        """Close SQLite connection"""
        with self._lock:
            if self._connection:
                self._connection.close()
                self._connection = None


def create_storage(database_url: str) -> StorageInterface:
    """
    Create a storage backend from a URL.

    Supported forms:
        memory://               in-process dictionary
        sqlite:///path/to.db    SQLite file (sqlite:///:memory: also works)
    """
    if database_url == MEMORY_SCHEME:
        return InMemoryStorage()
    if database_url.startswith(SQLITE_SCHEME):
        path = database_url[len(SQLITE_SCHEME):]
        if not path:
            raise ValueError(f"SQLite URL has no database path: {database_url}")
        return SQLiteStorage(path)
    raise ValueError(f"Unsupported storage URL: {database_url}")

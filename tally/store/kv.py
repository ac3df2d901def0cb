"""Key-value stores holding whole JSON records.

Every record is read and written in full; there is no partial update.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Protocol

from tally.store.schema import get_db_path, init_database

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Persistence port used by the registry and ledger."""

    def load(self, key: str) -> Any | None:
        """Return the value stored under key, or None if absent."""
        ...

    def save(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""
        ...


class MemoryStore:
    """In-memory store.

    Values are kept as JSON text so callers get fresh copies on every load,
    the same as with SqliteStore.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def load(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def save(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)


class SqliteStore:
    """Store backed by a single SQLite table of JSON values."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path if db_path is not None else get_db_path()
        init_database(self.db_path)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def load(self, key: str) -> Any | None:
        """Load and decode a record.

        Raises:
            sqlite3.Error: If database operation fails.
            json.JSONDecodeError: If the stored value is not valid JSON.
        """
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM kv WHERE key = ?", (key,))
            row = cursor.fetchone()

        if row is None:
            logger.debug("No record stored for %s", key)
            return None
        return json.loads(row[0])

    def save(self, key: str, value: Any) -> None:
        """Encode and write a record, replacing the previous one.

        Raises:
            sqlite3.Error: If database operation fails.
        """
        payload = json.dumps(value)
        with self._connect() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute("INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)", (key, payload))
                conn.commit()
            except sqlite3.Error:
                conn.rollback()
                raise
        logger.debug("Saved %s (%d bytes)", key, len(payload))

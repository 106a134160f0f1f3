"""Key-value storage medium for Soundshelf."""

import logging
import sqlite3
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger("soundshelf.storage")


class StorageError(Exception):
    """Raised when the underlying storage medium cannot be read or written."""


class KeyValueStorage:
    """SQLite-backed key-value area holding UTF-8 JSON text per key.

    Every key is independent: writing one never touches another. A missing
    key reads as ``None``.
    """

    def __init__(self, db_path: str):
        """Initialize storage with database path."""
        self.db_path = str(Path(db_path).expanduser())
        logger.debug(f"Initializing storage at: {self.db_path}")
        self._initialize_db()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _initialize_db(self) -> None:
        """Initialize the SQLite database."""
        try:
            # Each call opens its own connection, so ":memory:" is not usable here
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT,
                        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                """
                )
                conn.commit()
                logger.debug("Storage database initialized successfully")
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to initialize storage database: {e}")
            raise StorageError(f"Failed to initialize storage at {self.db_path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        """Return the raw text stored under ``key``, or None if absent."""
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
                row = cursor.fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read key {key!r}: {e}") from e

        if row is None:
            logger.debug(f"Storage miss for key: {key}")
            return None
        return row[0]

    def set_item(self, key: str, value: str) -> None:
        """Replace the text stored under ``key``."""
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)",
                    (key, value),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to write key {key!r}: {e}") from e
        logger.debug(f"Stored {len(value)} characters under key: {key}")

    def remove_item(self, key: str) -> None:
        """Delete ``key``; a missing key is not an error."""
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to remove key {key!r}: {e}") from e

    def keys(self) -> List[str]:
        """List all stored keys."""
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT key FROM kv_store ORDER BY key")
                return [row[0] for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise StorageError(f"Failed to list keys: {e}") from e

    def clear(self) -> None:
        """Clear all stored keys."""
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT COUNT(*) FROM kv_store")
                count_before = cursor.fetchone()[0]

                cursor.execute("DELETE FROM kv_store")
                conn.commit()

                logger.info(f"Cleared {count_before} keys from storage")
        except sqlite3.Error as e:
            raise StorageError(f"Failed to clear storage: {e}") from e

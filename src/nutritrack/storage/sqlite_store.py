"""SQLite-backed key-value store for persisted engine state."""
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator, Optional, Union

from .gateway import StorageKey

log = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value BLOB NOT NULL,
    updated_at TEXT NOT NULL
)
"""


class SQLiteStore:
    """
    Stores each blob as one row of a ``kv_store`` table.

    A fresh connection is opened per call, so the store holds no open
    handles between mutations.
    """

    def __init__(self, db_path: Union[str, Path]):
        # Needs a file path: a per-call ":memory:" connection would start empty
        self.db_path = str(db_path)
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.execute(_SCHEMA)

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def load(self, key: StorageKey) -> Optional[bytes]:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key.value,)
                ).fetchone()
        except sqlite3.Error as e:
            log.error(f"[STORE] Failed to read {key.value} from {self.db_path}: {e}")
            return None
        if row is None:
            return None
        return bytes(row[0])

    def save(self, key: StorageKey, data: bytes) -> bool:
        updated_at = datetime.now(timezone.utc).isoformat()
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key.value, sqlite3.Binary(data), updated_at),
                )
        except sqlite3.Error as e:
            log.error(f"[STORE] Failed to write {key.value} to {self.db_path}: {e}")
            return False
        log.debug(f"[STORE] Saved {key.value} ({len(data)} bytes)")
        return True

    def delete(self, key: StorageKey) -> bool:
        try:
            with self._connect() as conn:
                cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (key.value,))
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            log.error(f"[STORE] Failed to delete {key.value} from {self.db_path}: {e}")
            return False

"""
Key-Value Store

Small SQLite-backed store for console state that survives restarts.
"""

import sqlite3
import time
from pathlib import Path

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at INTEGER NOT NULL
) WITHOUT ROWID;
"""


class KeyValueStore:
    """String values keyed by name, one row per key."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _init_db(self):
        """Initialize database."""
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        con = self._connect()
        try:
            con.execute("PRAGMA journal_mode=WAL")
            con.executescript(SCHEMA)
        finally:
            con.close()

    def get(self, key: str) -> str | None:
        con = self._connect()
        try:
            cur = con.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cur.fetchone()
            return row[0] if row else None
        finally:
            con.close()

    def set(self, key: str, value: str) -> None:
        now = int(time.time())
        con = self._connect()
        try:
            con.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, now),
            )
            con.commit()
        finally:
            con.close()

    def delete(self, key: str) -> None:
        con = self._connect()
        try:
            con.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            con.commit()
        finally:
            con.close()

    def ping(self) -> None:
        """Raise sqlite3.Error if the database is unreachable."""
        con = self._connect()
        try:
            con.execute("SELECT 1").fetchone()
        finally:
            con.close()

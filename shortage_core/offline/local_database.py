# =============================================================================
# shortage_core/offline/local_database.py
# Local SQLite Database for Offline Operations
# =============================================================================
"""
LocalDatabase - the on-device SQLite file.

Two tables:
- fallback_queue: JSON payloads waiting for Supabase, grouped by namespace
  and unique per (namespace, record_key); row id order is queue order
- app_settings: small JSON key/value records (e.g. the remembered physician)

Each thread gets its own connection, since the sync engine writes from a
daemon thread while Streamlit reruns read from the script thread.
"""

from __future__ import annotations
import json
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional
import logging

from shortage_core.config import DEFAULT_LOCAL_DB
from shortage_core.errors import LocalStoreError

logger = logging.getLogger(__name__)

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS fallback_queue (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        namespace TEXT NOT NULL,
        record_key TEXT NOT NULL,
        data_json TEXT NOT NULL,
        created_at TEXT NOT NULL,
        attempts INTEGER NOT NULL DEFAULT 0,
        last_attempt TEXT,
        error_message TEXT,
        UNIQUE(namespace, record_key)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS app_settings (
        key TEXT PRIMARY KEY,
        value TEXT,
        updated_at TEXT NOT NULL
    )
    """,
)


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


class LocalDatabase:
    """
    Usage:
        db = LocalDatabase(tmp_path / "queue.db")
        db.queue_push("backup_reports", report.id, report.to_dict())
        db.queue_items("backup_reports")   # newest first
    """

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path) if db_path else DEFAULT_LOCAL_DB
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._local = threading.local()
        self._schema_ready = False

    def _fail(self, what: str, error: sqlite3.Error) -> LocalStoreError:
        return LocalStoreError(f"{what}: {error}", db_path=str(self.db_path))

    def _connection(self) -> sqlite3.Connection:
        conn = getattr(self._local, "conn", None)
        if conn is None:
            try:
                conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
            except sqlite3.Error as e:
                raise self._fail("Cannot open local database", e) from e
            conn.row_factory = sqlite3.Row
            self._local.conn = conn
        return conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Commit on success, roll back on any error (sqlite errors become LocalStoreError)."""
        conn = self._connection()
        try:
            yield conn
        except sqlite3.Error as e:
            conn.rollback()
            raise self._fail("Local database error", e) from e
        except Exception:
            conn.rollback()
            raise
        else:
            conn.commit()

    def initialize(self) -> None:
        if self._schema_ready:
            return
        with self.transaction() as conn:
            for statement in SCHEMA:
                conn.execute(statement)
        self._schema_ready = True
        logger.info(f"Local database ready at {self.db_path}")

    def query(self, sql: str, params: Optional[List] = None) -> List[sqlite3.Row]:
        self.initialize()
        try:
            return self._connection().execute(sql, params or []).fetchall()
        except sqlite3.Error as e:
            raise self._fail("Local query failed", e) from e

    def execute(self, sql: str, params: Optional[List] = None) -> int:
        """Run a write statement; returns the affected row count."""
        self.initialize()
        with self.transaction() as conn:
            return conn.execute(sql, params or []).rowcount

    # =========================================================================
    # QUEUE
    # =========================================================================

    def queue_push(self, namespace: str, record_key: str, data: Dict[str, Any]) -> int:
        """
        Put a payload at the head of a queue. An existing entry with the same
        key is replaced and moves to the head.

        Returns:
            Row id of the new entry
        """
        self.initialize()
        payload = json.dumps(data, ensure_ascii=False)
        with self.transaction() as conn:
            conn.execute(
                "DELETE FROM fallback_queue WHERE namespace = ? AND record_key = ?",
                [namespace, record_key],
            )
            cursor = conn.execute(
                "INSERT INTO fallback_queue (namespace, record_key, data_json, created_at) VALUES (?, ?, ?, ?)",
                [namespace, record_key, payload, _now()],
            )
            return cursor.lastrowid

    def queue_items(self, namespace: str, newest_first: bool = True, limit: Optional[int] = None) -> List[Dict]:
        sql = "SELECT * FROM fallback_queue WHERE namespace = ? ORDER BY id " + ("DESC" if newest_first else "ASC")
        params: List[Any] = [namespace]
        if limit:
            sql += " LIMIT ?"
            params.append(limit)

        entries = []
        for row in self.query(sql, params):
            entries.append({
                "id": row["id"],
                "key": row["record_key"],
                "data": json.loads(row["data_json"]),
                "created_at": row["created_at"],
                "attempts": row["attempts"],
                "last_attempt": row["last_attempt"],
                "error_message": row["error_message"],
            })
        return entries

    def queue_remove(self, namespace: str, record_key: str) -> bool:
        deleted = self.execute(
            "DELETE FROM fallback_queue WHERE namespace = ? AND record_key = ?",
            [namespace, record_key],
        )
        return deleted > 0

    def queue_clear(self, namespace: str) -> int:
        return self.execute("DELETE FROM fallback_queue WHERE namespace = ?", [namespace])

    def queue_count(self, namespace: str) -> int:
        rows = self.query("SELECT COUNT(*) FROM fallback_queue WHERE namespace = ?", [namespace])
        return rows[0][0]

    def queue_mark_failed(self, namespace: str, record_key: str, error: str) -> None:
        self.execute(
            "UPDATE fallback_queue SET attempts = attempts + 1, last_attempt = ?, error_message = ? "
            "WHERE namespace = ? AND record_key = ?",
            [_now(), error, namespace, record_key],
        )

    # =========================================================================
    # SETTINGS
    # =========================================================================

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Stored value decoded from JSON; raw text if it is not JSON."""
        rows = self.query("SELECT value FROM app_settings WHERE key = ?", [key])
        if not rows:
            return default
        try:
            return json.loads(rows[0]["value"])
        except (TypeError, json.JSONDecodeError):
            return rows[0]["value"]

    def set_setting(self, key: str, value: Any) -> None:
        text = value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)
        self.execute(
            "INSERT OR REPLACE INTO app_settings (key, value, updated_at) VALUES (?, ?, ?)",
            [key, text, _now()],
        )

    def close(self) -> None:
        """Close this thread's connection."""
        conn = getattr(self._local, "conn", None)
        if conn is not None:
            conn.close()
            self._local.conn = None


# Singleton accessor
_local_database: Optional[LocalDatabase] = None
_local_database_lock = threading.Lock()


def get_local_database(db_path: Optional[Path] = None) -> LocalDatabase:
    """Process-wide LocalDatabase; ``db_path`` only matters on the first call."""
    global _local_database
    with _local_database_lock:
        if _local_database is None:
            _local_database = LocalDatabase(db_path)
            _local_database.initialize()
    return _local_database

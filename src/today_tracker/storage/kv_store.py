# src/today_tracker/storage/kv_store.py

from __future__ import annotations

import base64
import contextlib
import json
import logging
import os
import sqlite3
import threading
from pathlib import Path

logger = logging.getLogger(__name__)


class MemoryKVStore:
    """Process-local store (tests, TODAY_STORAGE_BACKEND=memory)."""

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        with self._lock:
            self._data[key] = bytes(value)


class JsonFileKVStore:
    """
    Key-value store kept in a single JSON document.

    Values are bytes, stored base64-encoded. Writes go to a temp file and are
    swapped in with os.replace so a crash never leaves a half-written file.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text("utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self._path} does not contain a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> bytes | None:
        with self._lock:
            raw = self._read_all().get(key)
        if raw is None:
            return None
        return base64.b64decode(raw)

    def set(self, key: str, value: bytes) -> None:
        with self._lock:
            try:
                data = self._read_all()
            except Exception:
                logger.warning("KV file %s unreadable; rewriting it.", self._path)
                data = {}
            data[key] = base64.b64encode(value).decode("ascii")

            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp.write_text(json.dumps(data, indent=2), "utf-8")
            os.replace(tmp, self._path)
            with contextlib.suppress(Exception):
                os.chmod(self._path, 0o600)


class SqliteKVStore:
    """
    SQLite key-value store.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "today.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqliteKVStore ready db=%s", self._db_path)

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value BLOB NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def get(self, key: str) -> bytes | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return bytes(row[0]) if row else None
        finally:
            conn.close()

    def set(self, key: str, value: bytes) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv(key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, sqlite3.Binary(value)),
            )
            conn.commit()
        finally:
            conn.close()


def open_kv_store(backend: str, path: str | Path):
    """Build the configured backend ("json", "sqlite" or "memory")."""
    name = (backend or "json").strip().lower()
    if name == "sqlite":
        return SqliteKVStore(path)
    if name == "memory":
        return MemoryKVStore()
    return JsonFileKVStore(path)

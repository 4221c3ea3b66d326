"""Key-value persistence backends: in-memory, JSON files and SQLite."""
from __future__ import annotations

import json
import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any, Dict, Optional

LOGGER = logging.getLogger(__name__)

WARDROBE_KEY = "wardrobe"
OUTFITS_KEY = "outfits"
TRIPS_KEY = "trips"


class KeyValueStore:
    """Interface for whole-value reads and writes keyed by string.

    ``set`` replaces the full value in one write and returns ``False`` instead
    of raising when the backend fails.
    """

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> bool:
        raise NotImplementedError

    def remove(self, key: str) -> bool:
        raise NotImplementedError


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, values are JSON round-tripped to mimic persistence."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> bool:
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError):
            LOGGER.error("Value for %s is not JSON serialisable", key, exc_info=True)
            return False
        with self._lock:
            self._data[key] = raw
        return True

    def remove(self, key: str) -> bool:
        with self._lock:
            self._data.pop(key, None)
        return True


class JSONFileKeyValueStore(KeyValueStore):
    """JSON-file-backed store, one file per key, suitable for local runs."""

    def __init__(self, base_dir: str | Path = "data/store") -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.base_dir / f"{key}.json"

    def get(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text())
        except (OSError, json.JSONDecodeError):
            LOGGER.error("Error reading stored value for %s", key, exc_info=True)
            return None

    def set(self, key: str, value: Any) -> bool:
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            tmp_path.write_text(json.dumps(value, indent=2))
            tmp_path.replace(path)
        except (OSError, TypeError, ValueError):
            LOGGER.error("Error saving stored value for %s", key, exc_info=True)
            return False
        return True

    def remove(self, key: str) -> bool:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError:
            LOGGER.error("Error removing stored value for %s", key, exc_info=True)
            return False
        return True


class SQLiteKeyValueStore(KeyValueStore):
    """SQLite-backed store for lightweight durability."""

    def __init__(self, db_path: str | Path = "data/planner.db") -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
                """
            )

    def get(self, key: str) -> Optional[Any]:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return json.loads(row["value"]) if row else None

    def set(self, key: str, value: Any) -> bool:
        try:
            with self._connect() as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO kv_store (key, value) VALUES (?, ?)",
                    (key, json.dumps(value)),
                )
        except (sqlite3.Error, TypeError, ValueError):
            LOGGER.error("Error saving stored value for %s", key, exc_info=True)
            return False
        return True

    def remove(self, key: str) -> bool:
        try:
            with self._connect() as conn:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        except sqlite3.Error:
            LOGGER.error("Error removing stored value for %s", key, exc_info=True)
            return False
        return True


def build_key_value_store(backend: str, path: str | None = None) -> KeyValueStore:
    """Pick a backend by name, as configured by ``storage_backend``."""

    backend = backend.lower()
    if backend == "sqlite":
        return SQLiteKeyValueStore(path or "data/planner.db")
    if backend == "memory":
        return InMemoryKeyValueStore()
    return JSONFileKeyValueStore(path or "data/store")


__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JSONFileKeyValueStore",
    "SQLiteKeyValueStore",
    "build_key_value_store",
    "WARDROBE_KEY",
    "OUTFITS_KEY",
    "TRIPS_KEY",
]

"""Key-value storage for persisted selector state."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

from loguru import logger

from wallet_selector.utils.helpers import ensure_dir

STORAGE_PREFIX = "near-wallet-selector:"
SELECTED_WALLET_ID = "selectedWalletId"


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class KeyValueStore(Protocol):
    """Raw string storage (browser localStorage-like)."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStore:
    """Process-local store; nothing survives a restart."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class SqliteStore:
    """Local SQLite key-value store surviving process restarts."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        ensure_dir(db_path.parent)
        self._init_db()

    @classmethod
    def default(cls) -> "SqliteStore":
        return cls(Path.home() / ".wallet_selector" / "state" / "selector.db")

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL;")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    name TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )

    def get_item(self, key: str) -> str | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE name = ?",
                (key,),
            ).fetchone()
        return str(row["value"]) if row else None

    def set_item(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (name, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(name) DO UPDATE SET
                    value=excluded.value,
                    updated_at=excluded.updated_at
                """,
                (key, value, _utc_now()),
            )

    def remove_item(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM kv_store WHERE name = ?", (key,))


class JsonStorage:
    """
    Namespaced JSON view over a raw store.

    Keys are prefixed with ``near-wallet-selector:`` and values JSON-encoded.
    A value that no longer decodes reads as None and is removed.
    """

    def __init__(self, store: KeyValueStore, prefix: str = STORAGE_PREFIX):
        self.store = store
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get_item(self, key: str) -> Any:
        raw = self.store.get_item(self._key(key))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Removing undecodable storage value for {key}")
            self.store.remove_item(self._key(key))
            return None

    def set_item(self, key: str, value: Any) -> None:
        self.store.set_item(self._key(key), json.dumps(value, ensure_ascii=False))

    def remove_item(self, key: str) -> None:
        self.store.remove_item(self._key(key))

"""Persistent storage for selector state."""

from wallet_selector.storage.kv_store import (
    SELECTED_WALLET_ID,
    STORAGE_PREFIX,
    JsonStorage,
    KeyValueStore,
    MemoryStore,
    SqliteStore,
)

__all__ = ["JsonStorage", "KeyValueStore", "MemoryStore", "SqliteStore", "SELECTED_WALLET_ID", "STORAGE_PREFIX"]

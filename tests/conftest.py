"""Pytest hooks and fixtures."""

import pytest

from wallet_selector.bus.emitter import EventBus
from wallet_selector.config.schema import SelectorConfig
from wallet_selector.state.store import StateStore
from wallet_selector.storage.kv_store import JsonStorage, MemoryStore

from fakes import EventRecorder


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep tests away from the real home directory and WALLET_SELECTOR_* env vars."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for key in ("WALLET_SELECTOR_NETWORK", "WALLET_SELECTOR_CONTRACT_ID", "WALLET_SELECTOR_WALLETS"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config():
    return SelectorConfig(contract_id="guest-book.testnet", method_names=["addMessage"])


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def recorder(bus):
    return EventRecorder(bus)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def storage(memory_store):
    return JsonStorage(memory_store)


@pytest.fixture
def state():
    return StateStore()

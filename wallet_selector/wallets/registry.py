"""Wallet modules shipped with wallet-selector."""

from __future__ import annotations

from typing import Callable

from wallet_selector.wallets.base import WalletModule
from wallet_selector.wallets.sender import setup_sender

BUILTIN_MODULES: dict[str, Callable[[], WalletModule]] = {
    "sender": setup_sender,
}


def get_builtin_modules(enabled: list[str] | None = None) -> list[WalletModule]:
    """Descriptors of the built-in modules, optionally limited to ``enabled`` ids."""
    return [
        factory()
        for wallet_id, factory in BUILTIN_MODULES.items()
        if not enabled or wallet_id in enabled
    ]

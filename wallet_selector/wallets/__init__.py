"""Wallet modules with a pluggable adapter architecture."""

from wallet_selector.wallets.base import (
    HardwareWalletBehaviour,
    InjectedWallet,
    Wallet,
    WalletBehaviour,
    WalletContext,
    WalletModule,
    WalletType,
)
from wallet_selector.wallets.environment import InjectedEnvironment
from wallet_selector.wallets.sender import SenderWallet, setup_sender

__all__ = [
    "HardwareWalletBehaviour",
    "InjectedEnvironment",
    "InjectedWallet",
    "SenderWallet",
    "Wallet",
    "WalletBehaviour",
    "WalletContext",
    "WalletModule",
    "WalletType",
    "setup_sender",
]

"""Utility functions for wallet-selector."""

from wallet_selector.utils.helpers import ensure_dir, get_data_path, wait_for
from wallet_selector.utils.exceptions import (
    WalletSelectorError,
    WalletNotInstalledError,
    WalletNotConnectedError,
    InvalidSelectionError,
    ProviderRejectedError,
    InvalidResponseError,
    UnsupportedActionError,
    TimeoutError,
    RpcError,
    ErrorCategory,
    provider_error_message,
    sanitize_error_message,
)

__all__ = [
    "ensure_dir",
    "get_data_path",
    "wait_for",
    "WalletSelectorError",
    "WalletNotInstalledError",
    "WalletNotConnectedError",
    "InvalidSelectionError",
    "ProviderRejectedError",
    "InvalidResponseError",
    "UnsupportedActionError",
    "TimeoutError",
    "RpcError",
    "ErrorCategory",
    "provider_error_message",
    "sanitize_error_message",
]

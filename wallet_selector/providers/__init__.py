"""Network RPC provider module."""

from wallet_selector.providers.rpc import ProviderService

__all__ = ["ProviderService"]

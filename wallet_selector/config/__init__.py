"""Configuration module for wallet-selector."""

from wallet_selector.config.loader import load_config, save_config, get_config_path
from wallet_selector.config.schema import NETWORK_PRESETS, NetworkConfig, SelectorConfig, get_network

__all__ = [
    "SelectorConfig",
    "NetworkConfig",
    "NETWORK_PRESETS",
    "get_network",
    "load_config",
    "save_config",
    "get_config_path",
]

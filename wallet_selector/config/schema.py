"""Configuration schema using Pydantic.

Selector options and network presets; persisted to ~/.wallet_selector/config.json.
"""

import json
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic_settings import BaseSettings, NoDecode


class NetworkConfig(BaseModel):
    """NEAR network endpoints."""
    network_id: str
    node_url: str
    helper_url: str = ""
    explorer_url: str = ""
    wallet_url: str = ""


NETWORK_PRESETS: dict[str, NetworkConfig] = {
    "mainnet": NetworkConfig(
        network_id="mainnet",
        node_url="https://rpc.mainnet.near.org",
        helper_url="https://helper.mainnet.near.org",
        explorer_url="https://explorer.near.org",
        wallet_url="https://wallet.near.org",
    ),
    "testnet": NetworkConfig(
        network_id="testnet",
        node_url="https://rpc.testnet.near.org",
        helper_url="https://helper.testnet.near.org",
        explorer_url="https://explorer.testnet.near.org",
        wallet_url="https://wallet.testnet.near.org",
    ),
    "betanet": NetworkConfig(
        network_id="betanet",
        node_url="https://rpc.betanet.near.org",
        helper_url="https://helper.betanet.near.org",
        explorer_url="https://explorer.betanet.near.org",
        wallet_url="https://wallet.betanet.near.org",
    ),
}


def get_network(network: str | NetworkConfig | dict[str, Any]) -> NetworkConfig:
    """Resolve a preset name, a dict or a NetworkConfig into a NetworkConfig."""
    if isinstance(network, NetworkConfig):
        return network
    if isinstance(network, dict):
        return NetworkConfig.model_validate(network)
    preset = NETWORK_PRESETS.get((network or "").strip().lower())
    if preset is None:
        raise ValueError(f"Unknown network '{network}' (expected one of: {', '.join(NETWORK_PRESETS)})")
    return preset.model_copy()


class SelectorConfig(BaseSettings):
    """Root configuration for wallet-selector."""
    network: Annotated[NetworkConfig, NoDecode] = Field(default_factory=lambda: get_network("testnet"))
    contract_id: str = ""  # Contract the access key is requested for
    method_names: list[str] = Field(default_factory=list)  # Empty means any method
    wallets: list[str] = Field(default_factory=list)  # Enabled module ids; empty enables every module
    storage_path: Path | None = None  # SQLite file for the persisted selection
    log_level: str = "INFO"

    model_config = ConfigDict(
        env_prefix="WALLET_SELECTOR_",
        env_nested_delimiter="__",
    )

    @field_validator("network", mode="before")
    @classmethod
    def _resolve_network(cls, value: Any) -> Any:
        if isinstance(value, str):
            # Env values arrive raw: a preset name or a JSON object
            if value.lstrip().startswith("{"):
                return get_network(json.loads(value))
            return get_network(value)
        return value

    @property
    def storage_file(self) -> Path:
        """Resolved SQLite file path for persisted selector state."""
        if self.storage_path:
            return Path(self.storage_path).expanduser()
        return Path.home() / ".wallet_selector" / "state" / "selector.db"

    def is_enabled(self, wallet_id: str) -> bool:
        return not self.wallets or wallet_id in self.wallets

"""Event types for the wallet event bus."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Literal, Union

from wallet_selector.transactions import Account

EventName = Literal["connected", "disconnected", "networkChanged"]


@dataclass(frozen=True)
class ConnectedEvent:
    """A wallet signed in; ``accounts`` are the accounts it now exposes."""
    wallet_id: str
    accounts: list[Account] = field(default_factory=list)
    name: ClassVar[EventName] = "connected"


@dataclass(frozen=True)
class DisconnectedEvent:
    """A wallet session ended, explicitly or on a provider account change."""
    wallet_id: str
    name: ClassVar[EventName] = "disconnected"


@dataclass(frozen=True)
class NetworkChangedEvent:
    """The provider switched to a network other than the configured one."""
    wallet_id: str
    network_id: str
    name: ClassVar[EventName] = "networkChanged"


WalletEvent = Union[ConnectedEvent, DisconnectedEvent, NetworkChangedEvent]

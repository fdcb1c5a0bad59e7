"""Event bus module for decoupled wallet-controller-host communication."""

from wallet_selector.bus.events import ConnectedEvent, DisconnectedEvent, NetworkChangedEvent, WalletEvent
from wallet_selector.bus.emitter import EventBus

__all__ = ["EventBus", "ConnectedEvent", "DisconnectedEvent", "NetworkChangedEvent", "WalletEvent"]

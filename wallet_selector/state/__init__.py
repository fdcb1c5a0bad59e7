"""Shared selector state."""

from wallet_selector.state.store import SelectorState, StateStore, StateView

__all__ = ["SelectorState", "StateStore", "StateView"]

"""In-memory selector state: which wallet is currently active."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable

from loguru import logger


@dataclass(frozen=True)
class SelectorState:
    """Immutable snapshot of the shared selector state."""
    selected_wallet_id: str | None = None


StateListener = Callable[[SelectorState], None]


class StateStore:
    """
    Owned, single-writer holder of ``SelectorState``.

    Only the controller writes through ``update_state``; everything else reads
    through ``view()``. Listeners are called after each change with the new
    snapshot.
    """

    def __init__(self, initial: SelectorState | None = None) -> None:
        self._state = initial or SelectorState()
        self._listeners: list[StateListener] = []

    def get_state(self) -> SelectorState:
        return self._state

    def update_state(self, fn: Callable[[SelectorState], SelectorState]) -> SelectorState:
        """Replace the state with ``fn(previous)`` and notify listeners on change."""
        previous = self._state
        self._state = fn(previous)
        if self._state != previous:
            for listener in list(self._listeners):
                try:
                    listener(self._state)
                except Exception as e:
                    logger.exception(f"State listener failed: {e}")
        return self._state

    def set_selected_wallet_id(self, wallet_id: str | None) -> SelectorState:
        return self.update_state(lambda prev: replace(prev, selected_wallet_id=wallet_id))

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def view(self) -> "StateView":
        return StateView(self)


class StateView:
    """Read-only access to a ``StateStore``."""

    def __init__(self, store: StateStore) -> None:
        self._store = store

    def get_state(self) -> SelectorState:
        return self._store.get_state()

    @property
    def selected_wallet_id(self) -> str | None:
        return self._store.get_state().selected_wallet_id

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        return self._store.subscribe(listener)

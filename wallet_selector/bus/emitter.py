"""Publish/subscribe bus for wallet lifecycle events."""

from __future__ import annotations

import asyncio
import inspect
from collections import defaultdict
from typing import Any, Awaitable, Callable, Union

from loguru import logger

from wallet_selector.bus.events import EventName, WalletEvent

EventHandler = Callable[[WalletEvent], Union[None, Awaitable[None]]]


class EventBus:
    """
    Named-event bus shared by the controller, the wallets and the host.

    Handlers run inside ``emit`` in subscription order. A coroutine handler
    is scheduled as a task on the running loop; ``drain()`` waits for those
    tasks. A failing handler is logged and does not stop delivery to the
    others.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)
        self._pending: set[asyncio.Future[Any]] = set()

    def subscribe(self, name: EventName, handler: EventHandler) -> Callable[[], None]:
        """Register a handler for ``name``; returns a callable that removes it."""
        self._handlers[name].append(handler)

        def _unsubscribe() -> None:
            self.unsubscribe(name, handler)

        return _unsubscribe

    def unsubscribe(self, name: EventName, handler: EventHandler) -> None:
        handlers = self._handlers.get(name)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def emit(self, event: WalletEvent) -> None:
        """Deliver ``event`` to every handler subscribed to its name."""
        logger.debug(f"Event {event.name} from {event.wallet_id}")
        for handler in list(self._handlers.get(event.name, ())):
            try:
                result = handler(event)
            except Exception as e:
                logger.exception(f"Error in {event.name} handler: {e}")
                continue
            if inspect.isawaitable(result):
                self._schedule(event, result)

    def _schedule(self, event: WalletEvent, awaitable: Awaitable[None]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            logger.error(f"Dropped async {event.name} handler: no running event loop")
            return

        future = asyncio.ensure_future(awaitable, loop=loop)
        self._pending.add(future)

        def _done(fut: asyncio.Future[Any]) -> None:
            self._pending.discard(fut)
            if fut.cancelled():
                return
            exc = fut.exception()
            if exc is not None:
                logger.opt(exception=exc).error(f"Error in {event.name} handler: {exc}")

        future.add_done_callback(_done)

    async def drain(self) -> None:
        """Wait until every scheduled async handler has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def handler_count(self, name: EventName) -> int:
        return len(self._handlers.get(name, ()))

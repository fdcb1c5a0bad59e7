"""Helper utilities: polling, data paths."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable

from wallet_selector.utils.exceptions import TimeoutError as WaitTimeoutError

DEFAULT_WAIT_TIMEOUT = 0.1
DEFAULT_WAIT_INTERVAL = 0.05


async def wait_for(
    predicate: Callable[[], bool],
    *,
    timeout: float = DEFAULT_WAIT_TIMEOUT,
    interval: float = DEFAULT_WAIT_INTERVAL,
) -> bool:
    """
    Poll ``predicate`` every ``interval`` seconds until it returns truthy.

    Returns True on success. Raises ``TimeoutError`` (ours) once ``timeout``
    seconds have passed without the predicate holding.
    """

    async def _poll() -> bool:
        while not predicate():
            await asyncio.sleep(interval)
        return True

    try:
        return await asyncio.wait_for(_poll(), timeout)
    except asyncio.TimeoutError as e:
        raise WaitTimeoutError("wait_for", timeout) from e


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_path() -> Path:
    """Get the wallet-selector data directory (~/.wallet_selector)."""
    return ensure_dir(Path.home() / ".wallet_selector")

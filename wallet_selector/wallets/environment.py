"""Execution environment that wallet providers inject themselves into."""

from __future__ import annotations

import re
from typing import Any

_MOBILE_RE = re.compile(
    r"android|iphone|ipod|ipad|iemobile|blackberry|opera mini|mobile|silk",
    re.IGNORECASE,
)


class InjectedEnvironment:
    """
    Registry of externally injected provider handles, keyed by global name.

    A bridge (browser extension relay, companion process, test fixture)
    calls ``inject("near", handle)``; injected wallets look their handle up
    by name and may find nothing if the provider is not installed.
    """

    def __init__(self, injected: dict[str, Any] | None = None, user_agent: str = "") -> None:
        self._injected: dict[str, Any] = dict(injected or {})
        self.user_agent = user_agent

    def get(self, name: str) -> Any | None:
        return self._injected.get(name)

    def inject(self, name: str, handle: Any) -> None:
        self._injected[name] = handle

    def eject(self, name: str) -> None:
        self._injected.pop(name, None)

    def is_mobile(self) -> bool:
        return bool(self.user_agent and _MOBILE_RE.search(self.user_agent))

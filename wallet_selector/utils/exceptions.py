"""
Exception hierarchy for wallet-selector.

Provides:
- A uniform error carrying a code, category and details, independent of the
  native error shape of the wallet provider that produced it
- One subclass per failure kind a host application may want to branch on
- Safe error message formatting (no secret leaks into logs)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STATE = "state"
    PROVIDER = "provider"
    TIMEOUT = "timeout"
    FATAL = "fatal"


class WalletSelectorError(Exception):
    """Base exception for all wallet-selector errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class WalletNotInstalledError(WalletSelectorError):
    """The wallet provider never appeared in the execution environment."""

    def __init__(self, wallet_id: str, wallet_name: str, download_url: str | None = None):
        super().__init__(
            f"{wallet_name} not installed",
            code="WALLET_NOT_INSTALLED",
            category=ErrorCategory.NOT_FOUND,
            details={"wallet_id": wallet_id, "download_url": download_url},
        )


class WalletNotConnectedError(WalletSelectorError):
    """Operation requires an active wallet session."""

    def __init__(self, wallet_name: str):
        super().__init__(
            f"{wallet_name} not connected",
            code="WALLET_NOT_CONNECTED",
            category=ErrorCategory.STATE,
            details={"wallet": wallet_name},
        )


class InvalidSelectionError(WalletSelectorError):
    """Unknown wallet id or missing sign-in parameters."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="INVALID_SELECTION", category=ErrorCategory.VALIDATION, details=details)


class ProviderRejectedError(WalletSelectorError):
    """The wallet provider returned an error or a falsy result."""

    def __init__(self, wallet_name: str, message: str, provider_code: str | None = None):
        super().__init__(
            message,
            code="PROVIDER_REJECTED",
            category=ErrorCategory.PROVIDER,
            details={"wallet": wallet_name, "provider_code": provider_code},
        )


class InvalidResponseError(WalletSelectorError):
    """The provider reported success without a usable payload."""

    def __init__(self, wallet_name: str):
        super().__init__(
            "Invalid response",
            code="INVALID_RESPONSE",
            category=ErrorCategory.PROVIDER,
            details={"wallet": wallet_name},
        )


class UnsupportedActionError(WalletSelectorError):
    """Transaction contains an action kind the wallet cannot forward."""

    def __init__(self, wallet_name: str, action_type: str, supported: tuple[str, ...] = ("FunctionCall",)):
        kinds = ", ".join(f"'{kind}'" for kind in supported)
        super().__init__(
            f"Only {kinds} actions types are supported by {wallet_name} (got '{action_type}')",
            code="UNSUPPORTED_ACTION",
            category=ErrorCategory.VALIDATION,
            details={"wallet": wallet_name, "action_type": action_type, "supported": list(supported)},
        )


class TimeoutError(WalletSelectorError):
    """Operation timeout error."""

    def __init__(self, operation: str, timeout_seconds: float):
        super().__init__(
            f"Operation '{operation}' timed out after {timeout_seconds}s",
            code="TIMEOUT",
            category=ErrorCategory.TIMEOUT,
            details={"operation": operation, "timeout_seconds": timeout_seconds},
        )


class RpcError(WalletSelectorError):
    """JSON-RPC node error."""

    def __init__(self, method: str, message: str, data: Any = None):
        super().__init__(
            f"RPC '{method}' failed: {message}",
            code="RPC_ERROR",
            category=ErrorCategory.PROVIDER,
            details={"method": method, "data": data},
        )


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|private[_-]?key)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"ed25519:[1-9A-HJ-NP-Za-km-z]{40,}"),
    re.compile(r"[a-zA-Z0-9]{64,}"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove keys and secrets from provider error messages."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def provider_error_message(error: Any, fallback: str) -> tuple[str, str | None]:
    """
    Normalize a provider error into (message, provider_code).

    Providers report errors either as plain strings or as objects with a
    ``type`` (and sometimes a ``message``) field.
    """
    if isinstance(error, str) and error:
        return error, None
    if isinstance(error, dict):
        code = error.get("type")
        message = code or error.get("message")
        if isinstance(message, str) and message:
            return message, code if isinstance(code, str) else None
    return fallback, None

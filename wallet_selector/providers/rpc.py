"""
NEAR JSON-RPC provider

Read-only node access shared with wallet modules (hardware wallets look up
access keys through it; injected wallets talk to their own provider).
"""

from __future__ import annotations

import itertools
from typing import Any, Optional

import httpx
from loguru import logger

from wallet_selector.utils.exceptions import RpcError


class ProviderService:
    """JSON-RPC 2.0 client for one NEAR node"""

    def __init__(
        self,
        node_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize provider.

        Args:
            node_url: RPC endpoint of the configured network
            timeout: Request timeout in seconds
            client: Pre-built HTTP client (tests inject a mock transport)
        """
        self.node_url = node_url
        self.timeout = timeout
        self._client = client
        self._ids = itertools.count(1)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def request(self, method: str, params: Any) -> Any:
        """Send one JSON-RPC request and return its ``result``."""
        client = await self._get_client()
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }
        resp = await client.post(self.node_url, json=payload)
        resp.raise_for_status()
        data = resp.json()

        error = data.get("error")
        if error:
            message = error.get("message") or error.get("name") or "Unknown error"
            logger.debug(f"RPC {method} error: {error}")
            raise RpcError(method, str(message), data=error.get("data") or error.get("cause"))

        result = data.get("result")
        # Query errors come back inside a successful envelope
        if isinstance(result, dict) and result.get("error"):
            raise RpcError(method, str(result["error"]))
        return result

    async def query(self, params: dict[str, Any]) -> Any:
        return await self.request("query", params)

    async def view_account(self, account_id: str, finality: str = "final") -> dict[str, Any]:
        return await self.query({
            "request_type": "view_account",
            "finality": finality,
            "account_id": account_id,
        })

    async def view_access_key(self, account_id: str, public_key: str, finality: str = "final") -> dict[str, Any]:
        return await self.query({
            "request_type": "view_access_key",
            "finality": finality,
            "account_id": account_id,
            "public_key": public_key,
        })

    async def block(self, finality: str = "final") -> dict[str, Any]:
        return await self.request("block", {"finality": finality})

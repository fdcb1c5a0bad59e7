"""Sender wallet: browser-extension wallet injected as the ``near`` global."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Protocol

from wallet_selector.bus.events import ConnectedEvent, DisconnectedEvent, NetworkChangedEvent
from wallet_selector.transactions import Account, Action, FunctionCallAction, Transaction
from wallet_selector.utils.exceptions import (
    InvalidResponseError,
    ProviderRejectedError,
    TimeoutError as WaitTimeoutError,
    UnsupportedActionError,
    WalletNotConnectedError,
    WalletNotInstalledError,
    provider_error_message,
    sanitize_error_message,
)
from wallet_selector.utils.helpers import wait_for
from wallet_selector.wallets.base import InjectedWallet, WalletContext, WalletModule, WalletType

SENDER_DOWNLOAD_URL = "https://chrome.google.com/webstore/detail/sender-wallet/epapihdplajcdnnkdeiahlgigofloibg"
SENDER_GLOBAL = "near"
SIGN_IN_STATUS_TIMEOUT = 0.3


class InjectedSender(Protocol):
    """Shape of the handle the Sender extension injects."""

    is_sender: bool

    def is_signed_in(self) -> bool: ...

    def get_account_id(self) -> str | None: ...

    async def sign_out(self) -> bool | dict[str, Any]: ...

    async def request_sign_in(self, *, contract_id: str, method_names: list[str]) -> dict[str, Any]: ...

    async def sign_and_send_transaction(self, *, receiver_id: str, actions: list[dict[str, Any]]) -> dict[str, Any]: ...

    async def request_sign_transactions(self, *, transactions: list[dict[str, Any]]) -> dict[str, Any]: ...

    def on(self, event: str, handler: Callable[..., Any]) -> None: ...

    def remove(self, event: str, handler: Callable[..., Any]) -> None: ...


class SenderWallet(InjectedWallet):
    """Adapter over the injected Sender handle."""

    def __init__(self, context: WalletContext):
        super().__init__(context)
        self._wallet: InjectedSender | None = None
        self._listeners: list[tuple[str, Callable[..., Any]]] = []

    @property
    def _name(self) -> str:
        return self.metadata.name

    def get_download_url(self) -> str:
        return SENDER_DOWNLOAD_URL

    async def is_available(self) -> bool:
        return not self.environment.is_mobile()

    async def is_installed(self) -> bool:
        try:
            return await wait_for(lambda: bool(getattr(self.environment.get(SENDER_GLOBAL), "is_sender", False)))
        except WaitTimeoutError as e:
            self.logger.debug(f"Sender:is_installed: {e}")
            return False

    async def init(self) -> None:
        await self._setup_wallet()

    def _cleanup(self) -> None:
        if self._wallet is not None:
            for event, handler in self._listeners:
                self._wallet.remove(event, handler)
        self._listeners.clear()
        self._wallet = None

    def _listen(self, event: str, handler: Callable[..., Any]) -> None:
        assert self._wallet is not None
        self._wallet.on(event, handler)
        self._listeners.append((event, handler))

    async def _setup_wallet(self) -> InjectedSender:
        if self._wallet is not None:
            return self._wallet

        if not await self.is_installed():
            raise WalletNotInstalledError(self.metadata.id, self._name, self.get_download_url())

        self._wallet = self.environment.get(SENDER_GLOBAL)

        try:
            # Sign-in status is read from the extension background asynchronously
            await wait_for(
                lambda: bool(self._wallet is not None and self._wallet.is_signed_in()),
                timeout=SIGN_IN_STATUS_TIMEOUT,
            )
        except WaitTimeoutError:
            self.logger.debug("Sender:setup_wallet: not signed in yet")

        self._listen("accountChanged", self._on_account_changed)
        self._listen("rpcChanged", self._on_rpc_changed)
        return self._wallet

    async def _on_account_changed(self, new_account_id: Any = None) -> None:
        self.logger.info(f"Sender:on_account_changed {new_account_id}")
        self._cleanup()
        self.emitter.emit(DisconnectedEvent(self.metadata.id))

    async def _on_rpc_changed(self, payload: Mapping[str, Any] | None) -> None:
        rpc = (payload or {}).get("rpc") or {}
        network_id = rpc.get("networkId")
        if not network_id:
            self.logger.warning(f"Sender:on_rpc_changed without networkId, ignoring: {payload!r}")
            return
        if network_id == self.network.network_id:
            return
        self.logger.info(f"Sender:on_rpc_changed {self.network.network_id} -> {network_id}")
        await self.disconnect()
        self.emitter.emit(NetworkChangedEvent(self.metadata.id, network_id))

    def _get_wallet(self) -> InjectedSender:
        if self._wallet is None:
            raise WalletNotConnectedError(self._name)
        return self._wallet

    def _get_accounts(self) -> list[Account]:
        if self._wallet is None:
            return []
        account_id = self._wallet.get_account_id()
        if not account_id:
            return []
        return [Account(account_id=account_id)]

    def _transform_actions(self, actions: list[Action]) -> list[dict[str, Any]]:
        for action in actions:
            if not isinstance(action, FunctionCallAction):
                raise UnsupportedActionError(self._name, getattr(action, "type", type(action).__name__))
        return [action.params() for action in actions]

    def _transform_transactions(self, transactions: list[Transaction]) -> list[dict[str, Any]]:
        return [
            {"receiverId": tx.receiver_id, "actions": self._transform_actions(tx.actions)}
            for tx in transactions
        ]

    def _unwrap_response(self, res: Mapping[str, Any] | None) -> list[Any]:
        res = res or {}
        if res.get("error"):
            message, code = provider_error_message(res["error"], "Failed to sign transaction")
            self.logger.warning(f"Sender: provider rejected transaction: {sanitize_error_message(message)}")
            raise ProviderRejectedError(self._name, message, provider_code=code)
        response = res.get("response")
        # A successful call always produces at least one outcome
        if not response:
            raise InvalidResponseError(self._name)
        return list(response)

    async def connect(self) -> list[Account]:
        wallet = await self._setup_wallet()
        existing_accounts = self._get_accounts()

        # TODO: re-check is_signed_in() here; an out-of-band account switch without accountChanged returns stale accounts
        if existing_accounts:
            self.emitter.emit(ConnectedEvent(self.metadata.id, existing_accounts))
            return existing_accounts

        res = await wallet.request_sign_in(
            contract_id=self.options.contract_id,
            method_names=list(self.options.method_names),
        ) or {}
        access_key = res.get("accessKey")
        error = res.get("error")

        if not access_key or error:
            await self.disconnect()
            message, code = provider_error_message(error, "Failed to connect")
            raise ProviderRejectedError(self._name, message, provider_code=code)

        new_accounts = self._get_accounts()
        self.emitter.emit(ConnectedEvent(self.metadata.id, new_accounts))
        return new_accounts

    async def disconnect(self) -> None:
        if self._wallet is None:
            return

        if not self._wallet.is_signed_in():
            self._cleanup()
            return

        res = await self._wallet.sign_out()

        if not res:
            raise ProviderRejectedError(self._name, "Failed to disconnect")

        if isinstance(res, Mapping):
            message, code = provider_error_message(res.get("error"), "Failed to disconnect")
            raise ProviderRejectedError(self._name, message, provider_code=code)

        self._cleanup()
        self.emitter.emit(DisconnectedEvent(self.metadata.id))

    async def get_accounts(self) -> list[Account]:
        return self._get_accounts()

    async def sign_and_send_transaction(
        self,
        actions: list[Action],
        receiver_id: str | None = None,
        signer_id: str | None = None,
    ) -> Any:
        receiver_id = receiver_id or self.options.contract_id
        self.logger.debug(
            f"Sender:sign_and_send_transaction signer={signer_id} receiver={receiver_id} actions={len(actions)}"
        )

        wallet = self._get_wallet()
        res = await wallet.sign_and_send_transaction(
            receiver_id=receiver_id,
            actions=self._transform_actions(actions),
        )
        return self._unwrap_response(res)[0]

    async def sign_and_send_transactions(self, transactions: list[Transaction]) -> list[Any]:
        self.logger.debug(f"Sender:sign_and_send_transactions count={len(transactions)}")

        wallet = self._get_wallet()
        res = await wallet.request_sign_transactions(
            transactions=self._transform_transactions(transactions),
        )
        return self._unwrap_response(res)


def setup_sender(icon_url: str = "./assets/sender-icon.png") -> WalletModule:
    """Wallet module descriptor for Sender."""
    return WalletModule(
        id="sender",
        type=WalletType.INJECTED,
        name="Sender",
        description=None,
        icon_url=icon_url,
        wallet=SenderWallet,
    )

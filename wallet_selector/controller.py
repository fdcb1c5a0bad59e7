"""Wallet controller: roster of wallets and single active selection.

The controller is the only writer of the selection. It keeps the persisted
``selectedWalletId`` and the in-memory ``SelectorState`` in step, and makes
sure at most one wallet is connected by signing the current one out before
another signs in.
"""

from __future__ import annotations

import functools
from typing import Any

from loguru import logger

from wallet_selector.bus.emitter import EventBus
from wallet_selector.bus.events import DisconnectedEvent, WalletEvent
from wallet_selector.config.schema import SelectorConfig
from wallet_selector.providers.rpc import ProviderService
from wallet_selector.state.store import StateStore
from wallet_selector.storage.kv_store import SELECTED_WALLET_ID, JsonStorage
from wallet_selector.transactions import Account
from wallet_selector.utils.exceptions import InvalidSelectionError, WalletSelectorError
from wallet_selector.wallets.base import Wallet, WalletContext, WalletModule, WalletType
from wallet_selector.wallets.environment import InjectedEnvironment


class WalletController:
    """Owns the wallet roster and the selected wallet."""

    def __init__(
        self,
        options: SelectorConfig,
        modules: list[WalletModule],
        emitter: EventBus,
        *,
        storage: JsonStorage,
        state: StateStore,
        provider: ProviderService | None = None,
        environment: InjectedEnvironment | None = None,
    ):
        self.options = options
        self.network = options.network
        self.modules = modules
        self.emitter = emitter
        self.storage = storage
        self.state = state
        self.provider = provider
        self.environment = environment or InjectedEnvironment()

        self._wallets: list[Wallet] = []
        self._unsubscribe = self.emitter.subscribe("disconnected", self._on_disconnected)

    def _setup_wallet_modules(self) -> list[Wallet]:
        wallets: list[Wallet] = []
        view = self.state.view()
        for module in self.modules:
            if not self.options.is_enabled(module.id):
                logger.debug(f"Wallet module {module.id} disabled by config")
                continue
            context = WalletContext(
                options=self.options,
                metadata=module,
                network=self.network,
                provider=self.provider,
                emitter=self.emitter,
                logger=logger.bind(wallet=module.id),
                storage=self.storage,
                state=view,
                environment=self.environment,
            )
            wallets.append(Wallet(module, module.wallet(context)))
        return wallets

    def _decorate_wallets(self, wallets: list[Wallet]) -> list[Wallet]:
        for wallet in wallets:
            wallet.sign_in = self._guard_sign_in(wallet)
        return wallets

    def _guard_sign_in(self, wallet: Wallet):
        sign_in = wallet.sign_in

        @functools.wraps(sign_in)
        async def guarded_sign_in(**params: Any) -> list[Account]:
            selected = self.get_selected_wallet()

            if selected is not None:
                if selected.id == wallet.id:
                    logger.debug(f"Wallet {wallet.id} already selected")
                    return await wallet.get_accounts()

                logger.info(f"Signing out of {selected.id} before signing in to {wallet.id}")
                await selected.sign_out()
                self._clear_selection()

            accounts = await sign_in(**params)
            self._commit_selection(wallet.id)
            return accounts

        return guarded_sign_in

    def _commit_selection(self, wallet_id: str) -> None:
        self.storage.set_item(SELECTED_WALLET_ID, wallet_id)
        self.state.set_selected_wallet_id(wallet_id)

    def _clear_selection(self) -> None:
        self.storage.remove_item(SELECTED_WALLET_ID)
        self.state.set_selected_wallet_id(None)

    def _on_disconnected(self, event: WalletEvent) -> None:
        if isinstance(event, DisconnectedEvent) and event.wallet_id == self.state.get_state().selected_wallet_id:
            logger.info(f"Selected wallet {event.wallet_id} disconnected")
            self._clear_selection()

    async def init(self) -> None:
        """Build the roster and restore the persisted selection if still signed in."""
        self._wallets = self._decorate_wallets(self._setup_wallet_modules())

        selected_wallet_id = self.storage.get_item(SELECTED_WALLET_ID)
        wallet = self.get_wallet(selected_wallet_id)

        if wallet is not None:
            try:
                await wallet.init()
                signed_in = await wallet.is_signed_in()
            except WalletSelectorError as e:
                logger.warning(f"Failed to restore wallet {wallet.id}: {e}")
                signed_in = False

            if signed_in:
                self.state.set_selected_wallet_id(wallet.id)
                logger.info(f"Restored wallet selection: {wallet.id}")
                return

        if selected_wallet_id is not None:
            logger.info(f"Removing stale wallet selection: {selected_wallet_id}")
            self.storage.remove_item(SELECTED_WALLET_ID)

    def get_selected_wallet(self) -> Wallet | None:
        return self.get_wallet(self.state.get_state().selected_wallet_id)

    def get_wallet(self, wallet_id: str | None) -> Wallet | None:
        if not wallet_id or not isinstance(wallet_id, str):
            return None
        return next((w for w in self._wallets if w.id == wallet_id), None)

    def get_wallets(self) -> list[Wallet]:
        return list(self._wallets)

    async def sign_in(
        self,
        wallet_id: str,
        account_id: str | None = None,
        derivation_path: str | None = None,
    ) -> list[Account]:
        wallet = self.get_wallet(wallet_id)

        if wallet is None:
            raise InvalidSelectionError(f"Invalid wallet '{wallet_id}'", field="wallet_id")

        if wallet.type == WalletType.HARDWARE:
            if not account_id:
                raise InvalidSelectionError("Invalid account id", field="account_id")

            if not derivation_path:
                raise InvalidSelectionError("Invalid derivation path", field="derivation_path")

            return await wallet.sign_in(account_id=account_id, derivation_path=derivation_path)

        return await wallet.sign_in()

    async def sign_out(self) -> None:
        wallet = self.get_selected_wallet()

        if wallet is None:
            return

        await wallet.sign_out()
        self._clear_selection()

    async def is_signed_in(self) -> bool:
        wallet = self.get_selected_wallet()

        if wallet is None:
            return False

        return await wallet.is_signed_in()

    async def get_accounts(self) -> list[Account]:
        wallet = self.get_selected_wallet()

        if wallet is None:
            return []

        return await wallet.get_accounts()

    def close(self) -> None:
        self._unsubscribe()

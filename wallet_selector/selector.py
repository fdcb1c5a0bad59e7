"""Wallet selector: the host-facing entry point wiring all collaborators."""

from __future__ import annotations

from loguru import logger

from wallet_selector.bus.emitter import EventBus, EventHandler
from wallet_selector.bus.events import EventName
from wallet_selector.config.schema import SelectorConfig
from wallet_selector.controller import WalletController
from wallet_selector.providers.rpc import ProviderService
from wallet_selector.state.store import StateStore, StateView
from wallet_selector.storage.kv_store import JsonStorage, KeyValueStore, SqliteStore
from wallet_selector.transactions import Account
from wallet_selector.utils.exceptions import InvalidSelectionError, WalletNotConnectedError
from wallet_selector.wallets.base import Wallet, WalletModule
from wallet_selector.wallets.environment import InjectedEnvironment


class WalletSelector:
    """
    Provider-agnostic wallet access for a host application.

    Usage:
        selector = await setup_wallet_selector(config, [setup_sender()], environment=env)
        selector.on("connected", lambda event: print(event.accounts))
        await selector.sign_in("sender")
        wallet = selector.wallet()
        outcome = await wallet.sign_and_send_transaction([FunctionCallAction("add_message", {"text": "hi"})])
    """

    def __init__(
        self,
        config: SelectorConfig,
        modules: list[WalletModule],
        *,
        store: KeyValueStore | None = None,
        environment: InjectedEnvironment | None = None,
        provider: ProviderService | None = None,
    ):
        self.config = config
        self.emitter = EventBus()
        self._state = StateStore()
        self.storage = JsonStorage(store if store is not None else SqliteStore(config.storage_file))
        self.provider = provider or ProviderService(config.network.node_url)
        self.controller = WalletController(
            config,
            modules,
            self.emitter,
            storage=self.storage,
            state=self._state,
            provider=self.provider,
            environment=environment,
        )

    @property
    def state(self) -> StateView:
        return self._state.view()

    @property
    def network(self):
        return self.config.network

    async def init(self) -> None:
        await self.controller.init()
        logger.info(
            f"Wallet selector ready on {self.config.network.network_id} "
            f"({len(self.controller.get_wallets())} wallets, selected={self._state.get_state().selected_wallet_id})"
        )

    def on(self, event: EventName, handler: EventHandler):
        """Subscribe to a wallet event; returns an unsubscribe callable."""
        return self.emitter.subscribe(event, handler)

    def off(self, event: EventName, handler: EventHandler) -> None:
        self.emitter.unsubscribe(event, handler)

    def get_wallets(self) -> list[Wallet]:
        return self.controller.get_wallets()

    def wallet(self, wallet_id: str | None = None) -> Wallet:
        """The named wallet, or the selected one when no id is given."""
        if wallet_id is not None:
            wallet = self.controller.get_wallet(wallet_id)
            if wallet is None:
                raise InvalidSelectionError(f"Invalid wallet '{wallet_id}'", field="wallet_id")
            return wallet

        wallet = self.controller.get_selected_wallet()
        if wallet is None:
            raise WalletNotConnectedError("Wallet selector")
        return wallet

    async def sign_in(
        self,
        wallet_id: str,
        account_id: str | None = None,
        derivation_path: str | None = None,
    ) -> list[Account]:
        return await self.controller.sign_in(wallet_id, account_id=account_id, derivation_path=derivation_path)

    async def sign_out(self) -> None:
        await self.controller.sign_out()

    async def is_signed_in(self) -> bool:
        return await self.controller.is_signed_in()

    async def get_accounts(self) -> list[Account]:
        return await self.controller.get_accounts()

    async def close(self) -> None:
        await self.emitter.drain()
        self.controller.close()
        await self.provider.close()


async def setup_wallet_selector(
    config: SelectorConfig,
    modules: list[WalletModule],
    *,
    store: KeyValueStore | None = None,
    environment: InjectedEnvironment | None = None,
    provider: ProviderService | None = None,
) -> WalletSelector:
    """Build a selector and restore any persisted selection."""
    selector = WalletSelector(config, modules, store=store, environment=environment, provider=provider)
    await selector.init()
    return selector

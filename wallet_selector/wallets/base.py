"""Wallet module contract: descriptors, behaviours and the wallet wrapper."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from wallet_selector.transactions import Account, Action, Transaction

if TYPE_CHECKING:
    from wallet_selector.bus.emitter import EventBus
    from wallet_selector.config.schema import NetworkConfig, SelectorConfig
    from wallet_selector.providers.rpc import ProviderService
    from wallet_selector.state.store import StateView
    from wallet_selector.storage.kv_store import JsonStorage
    from wallet_selector.wallets.environment import InjectedEnvironment


class WalletType(str, Enum):
    """Capability tag of a wallet module."""
    INJECTED = "injected"
    BROWSER = "browser"
    HARDWARE = "hardware"


@dataclass(frozen=True)
class WalletModule:
    """Immutable descriptor of a configurable wallet."""
    id: str
    type: WalletType
    name: str
    wallet: Callable[["WalletContext"], "WalletBehaviour"]
    description: str | None = None
    icon_url: str = ""


@dataclass
class WalletContext:
    """Collaborators handed to a wallet factory. Wallets never see each other."""
    options: SelectorConfig
    metadata: WalletModule
    network: NetworkConfig
    provider: ProviderService | None
    emitter: EventBus
    logger: Any
    storage: JsonStorage
    state: StateView
    environment: InjectedEnvironment


class WalletBehaviour(ABC):
    """Capabilities every wallet module provides."""

    def __init__(self, context: WalletContext):
        self.options = context.options
        self.metadata = context.metadata
        self.network = context.network
        self.provider = context.provider
        self.emitter = context.emitter
        self.logger = context.logger
        self.storage = context.storage
        self.state = context.state
        self.environment = context.environment

    @abstractmethod
    def get_download_url(self) -> str:
        pass

    @abstractmethod
    async def is_available(self) -> bool:
        pass

    async def init(self) -> None:
        """Restore any session the provider already holds."""

    @abstractmethod
    async def connect(self, **params: Any) -> list[Account]:
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        pass

    @abstractmethod
    async def get_accounts(self) -> list[Account]:
        pass

    @abstractmethod
    async def sign_and_send_transaction(
        self,
        actions: list[Action],
        receiver_id: str | None = None,
        signer_id: str | None = None,
    ) -> Any:
        pass

    @abstractmethod
    async def sign_and_send_transactions(self, transactions: list[Transaction]) -> list[Any]:
        pass


class InjectedWallet(WalletBehaviour):
    """Wallet backed by a provider handle injected into the environment."""

    @abstractmethod
    async def is_installed(self) -> bool:
        pass


class HardwareWalletBehaviour(WalletBehaviour):
    """Wallet that needs an account id and a derivation path to sign in."""

    @abstractmethod
    async def connect(self, *, account_id: str, derivation_path: str) -> list[Account]:
        pass


class Wallet:
    """
    One live wallet in the controller roster: module metadata plus behaviour.

    ``sign_in``/``sign_out`` are the selector-level names for the
    behaviour's ``connect``/``disconnect``.
    """

    def __init__(self, module: WalletModule, behaviour: WalletBehaviour):
        self.module = module
        self.behaviour = behaviour

    @property
    def id(self) -> str:
        return self.module.id

    @property
    def type(self) -> WalletType:
        return self.module.type

    @property
    def name(self) -> str:
        return self.module.name

    @property
    def description(self) -> str | None:
        return self.module.description

    @property
    def icon_url(self) -> str:
        return self.module.icon_url

    def get_download_url(self) -> str:
        return self.behaviour.get_download_url()

    async def is_available(self) -> bool:
        return await self.behaviour.is_available()

    async def init(self) -> None:
        await self.behaviour.init()

    async def sign_in(self, **params: Any) -> list[Account]:
        return await self.behaviour.connect(**params)

    async def sign_out(self) -> None:
        await self.behaviour.disconnect()

    async def is_signed_in(self) -> bool:
        return bool(await self.behaviour.get_accounts())

    async def get_accounts(self) -> list[Account]:
        return await self.behaviour.get_accounts()

    async def sign_and_send_transaction(
        self,
        actions: list[Action],
        receiver_id: str | None = None,
        signer_id: str | None = None,
    ) -> Any:
        return await self.behaviour.sign_and_send_transaction(actions, receiver_id=receiver_id, signer_id=signer_id)

    async def sign_and_send_transactions(self, transactions: list[Transaction]) -> list[Any]:
        return await self.behaviour.sign_and_send_transactions(transactions)

    def __repr__(self) -> str:
        return f"Wallet(id={self.id!r}, type={self.type.value!r})"

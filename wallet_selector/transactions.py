"""Accounts, transaction actions and transactions.

Actions form a tagged union: every action dataclass carries a ``type`` tag
matching the NEAR action kind and renders its provider payload through
``params()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

DEFAULT_GAS = "30000000000000"


@dataclass(frozen=True)
class Account:
    """An account visible through the active wallet."""
    account_id: str
    public_key: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"accountId": self.account_id}
        if self.public_key:
            out["publicKey"] = self.public_key
        return out


@dataclass(frozen=True)
class CreateAccountAction:
    type: ClassVar[str] = "CreateAccount"

    def params(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True)
class DeployContractAction:
    code: bytes
    type: ClassVar[str] = "DeployContract"

    def params(self) -> dict[str, Any]:
        return {"code": self.code}


@dataclass(frozen=True)
class FunctionCallAction:
    method_name: str
    args: dict[str, Any] = field(default_factory=dict)
    gas: str = DEFAULT_GAS
    deposit: str = "0"
    type: ClassVar[str] = "FunctionCall"

    def params(self) -> dict[str, Any]:
        return {
            "methodName": self.method_name,
            "args": self.args,
            "gas": self.gas,
            "deposit": self.deposit,
        }


@dataclass(frozen=True)
class TransferAction:
    deposit: str
    type: ClassVar[str] = "Transfer"

    def params(self) -> dict[str, Any]:
        return {"deposit": self.deposit}


@dataclass(frozen=True)
class StakeAction:
    stake: str
    public_key: str
    type: ClassVar[str] = "Stake"

    def params(self) -> dict[str, Any]:
        return {"stake": self.stake, "publicKey": self.public_key}


@dataclass(frozen=True)
class AddKeyAction:
    public_key: str
    access_key: dict[str, Any]
    type: ClassVar[str] = "AddKey"

    def params(self) -> dict[str, Any]:
        return {"publicKey": self.public_key, "accessKey": self.access_key}


@dataclass(frozen=True)
class DeleteKeyAction:
    public_key: str
    type: ClassVar[str] = "DeleteKey"

    def params(self) -> dict[str, Any]:
        return {"publicKey": self.public_key}


@dataclass(frozen=True)
class DeleteAccountAction:
    beneficiary_id: str
    type: ClassVar[str] = "DeleteAccount"

    def params(self) -> dict[str, Any]:
        return {"beneficiaryId": self.beneficiary_id}


Action = Union[
    CreateAccountAction,
    DeployContractAction,
    FunctionCallAction,
    TransferAction,
    StakeAction,
    AddKeyAction,
    DeleteKeyAction,
    DeleteAccountAction,
]


@dataclass(frozen=True)
class Transaction:
    """A transaction to be signed and sent by the active wallet."""
    receiver_id: str
    actions: list[Action]
    signer_id: str | None = None  # wallets sign with the active account when unset

"""Tests for the injected Sender wallet adapter."""

from __future__ import annotations

import pytest

from wallet_selector.transactions import FunctionCallAction, Transaction, TransferAction
from wallet_selector.utils.exceptions import (
    InvalidResponseError,
    ProviderRejectedError,
    UnsupportedActionError,
    WalletNotConnectedError,
    WalletNotInstalledError,
)
from wallet_selector.wallets.environment import InjectedEnvironment
from wallet_selector.wallets.sender import SENDER_DOWNLOAD_URL, SenderWallet, setup_sender

from fakes import FakeSender, make_context


def _sender(bus, config, handle=None, *, user_agent: str = "") -> SenderWallet:
    env = InjectedEnvironment(user_agent=user_agent)
    if handle is not None:
        env.inject("near", handle)
    module = setup_sender()
    return module.wallet(make_context(module, config=config, bus=bus, environment=env))


def test_setup_sender_descriptor():
    module = setup_sender(icon_url="/icons/sender.svg")
    assert module.id == "sender"
    assert module.type.value == "injected"
    assert module.name == "Sender"
    assert module.icon_url == "/icons/sender.svg"
    assert module.wallet is SenderWallet


@pytest.mark.asyncio
async def test_is_available_excludes_mobile(bus, config):
    desktop = _sender(bus, config, user_agent="Mozilla/5.0 (X11; Linux x86_64) Chrome/120.0")
    mobile = _sender(bus, config, user_agent="Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) Mobile/15E148")
    assert await desktop.is_available() is True
    assert await mobile.is_available() is False
    assert desktop.get_download_url() == SENDER_DOWNLOAD_URL


@pytest.mark.asyncio
async def test_is_installed_false_without_handle(bus, config):
    wallet = _sender(bus, config)
    assert await wallet.is_installed() is False


@pytest.mark.asyncio
async def test_is_installed_requires_sender_flag(bus, config):
    handle = FakeSender()
    handle.is_sender = False
    wallet = _sender(bus, config, handle)
    assert await wallet.is_installed() is False


@pytest.mark.asyncio
async def test_connect_raises_not_installed(bus, config, recorder):
    wallet = _sender(bus, config)
    with pytest.raises(WalletNotInstalledError) as exc_info:
        await wallet.connect()
    assert exc_info.value.message == "Sender not installed"
    assert exc_info.value.details["download_url"] == SENDER_DOWNLOAD_URL
    assert recorder.events == []


@pytest.mark.asyncio
async def test_get_accounts_never_connected_is_empty(bus, config):
    wallet = _sender(bus, config, FakeSender(account_id="bob.testnet"))
    assert await wallet.get_accounts() == []


@pytest.mark.asyncio
async def test_connect_requests_sign_in_and_emits_connected(bus, config, recorder):
    handle = FakeSender()
    wallet = _sender(bus, config, handle)

    accounts = await wallet.connect()

    assert [a.account_id for a in accounts] == ["alice.testnet"]
    assert ("request_sign_in", "guest-book.testnet", ["addMessage"]) in handle.calls
    assert recorder.names() == ["connected"]
    assert recorder.events[0].wallet_id == "sender"
    assert recorder.events[0].accounts == accounts


@pytest.mark.asyncio
async def test_connect_short_circuits_when_already_signed_in(bus, config, recorder):
    handle = FakeSender(account_id="bob.testnet")
    wallet = _sender(bus, config, handle)

    accounts = await wallet.connect()

    assert [a.account_id for a in accounts] == ["bob.testnet"]
    assert not any(call[0] == "request_sign_in" for call in handle.calls)
    assert recorder.names() == ["connected"]


@pytest.mark.asyncio
async def test_connect_rejected_with_error_type(bus, config, recorder):
    handle = FakeSender(sign_in_result={"accessKey": None, "error": {"type": "UserRejected"}})
    wallet = _sender(bus, config, handle)

    with pytest.raises(ProviderRejectedError) as exc_info:
        await wallet.connect()

    assert exc_info.value.message == "UserRejected"
    assert exc_info.value.details["provider_code"] == "UserRejected"
    assert recorder.events == []
    assert await wallet.get_accounts() == []
    assert handle.listeners["accountChanged"] == []


@pytest.mark.asyncio
async def test_connect_without_access_key_uses_fallback_message(bus, config):
    handle = FakeSender(sign_in_result={})
    wallet = _sender(bus, config, handle)

    with pytest.raises(ProviderRejectedError) as exc_info:
        await wallet.connect()
    assert exc_info.value.message == "Failed to connect"


@pytest.mark.asyncio
async def test_disconnect_noop_when_never_connected(bus, config, recorder):
    handle = FakeSender(account_id="bob.testnet")
    wallet = _sender(bus, config, handle)
    await wallet.disconnect()
    assert handle.calls == []
    assert recorder.events == []


@pytest.mark.asyncio
async def test_disconnect_signs_out_and_emits(bus, config, recorder):
    handle = FakeSender()
    wallet = _sender(bus, config, handle)
    await wallet.connect()

    await wallet.disconnect()

    assert ("sign_out",) in handle.calls
    assert recorder.names() == ["connected", "disconnected"]
    assert await wallet.get_accounts() == []
    assert handle.listeners["accountChanged"] == []
    assert handle.listeners["rpcChanged"] == []


@pytest.mark.asyncio
async def test_disconnect_skips_provider_when_not_signed_in(bus, config, recorder):
    handle = FakeSender()
    wallet = _sender(bus, config, handle)
    await wallet.init()

    await wallet.disconnect()

    assert ("sign_out",) not in handle.calls
    assert recorder.events == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "result, message",
    [
        (False, "Failed to disconnect"),
        ({"error": "Extension locked"}, "Extension locked"),
        ({"error": {"type": "NotSignedIn"}}, "NotSignedIn"),
    ],
)
async def test_disconnect_failure_keeps_session(bus, config, recorder, result, message):
    handle = FakeSender(account_id="bob.testnet", sign_out_result=result)
    wallet = _sender(bus, config, handle)
    await wallet.connect()

    with pytest.raises(ProviderRejectedError) as exc_info:
        await wallet.disconnect()

    assert exc_info.value.message == message
    assert recorder.names() == ["connected"]
    assert [a.account_id for a in await wallet.get_accounts()] == ["bob.testnet"]


@pytest.mark.asyncio
async def test_account_changed_disconnects_once(bus, config, recorder):
    handle = FakeSender()
    wallet = _sender(bus, config, handle)
    await wallet.connect()

    await handle.fire("accountChanged", "carol.testnet")
    await handle.fire("accountChanged", "dave.testnet")

    assert recorder.names() == ["connected", "disconnected"]
    assert await wallet.get_accounts() == []
    assert handle.calls.count(("sign_out",)) == 0


@pytest.mark.asyncio
async def test_rpc_changed_to_other_network(bus, config, recorder):
    handle = FakeSender()
    wallet = _sender(bus, config, handle)
    await wallet.connect()

    await handle.fire("rpcChanged", {"rpc": {"networkId": "mainnet"}})

    assert recorder.names() == ["connected", "disconnected", "networkChanged"]
    assert recorder.events[-1].network_id == "mainnet"
    assert await wallet.get_accounts() == []


@pytest.mark.asyncio
async def test_rpc_changed_same_network_is_ignored(bus, config, recorder):
    handle = FakeSender()
    wallet = _sender(bus, config, handle)
    await wallet.connect()

    await handle.fire("rpcChanged", {"rpc": {"networkId": "testnet"}})

    assert recorder.names() == ["connected"]
    assert [a.account_id for a in await wallet.get_accounts()] == ["alice.testnet"]


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [None, {}, {"rpc": {}}, {"rpc": {"networkId": ""}}])
async def test_rpc_changed_without_network_id_is_ignored(bus, config, recorder, payload):
    handle = FakeSender()
    wallet = _sender(bus, config, handle)
    await wallet.connect()

    await handle.fire("rpcChanged", payload)

    assert recorder.names() == ["connected"]
    assert ("sign_out",) not in handle.calls
    assert [a.account_id for a in await wallet.get_accounts()] == ["alice.testnet"]


@pytest.mark.asyncio
async def test_sign_and_send_requires_connection(bus, config):
    wallet = _sender(bus, config, FakeSender())
    with pytest.raises(WalletNotConnectedError) as exc_info:
        await wallet.sign_and_send_transaction([FunctionCallAction("addMessage")])
    assert exc_info.value.message == "Sender not connected"


@pytest.mark.asyncio
async def test_sign_and_send_defaults_receiver_to_contract(bus, config):
    handle = FakeSender()
    wallet = _sender(bus, config, handle)
    await wallet.connect()

    outcome = await wallet.sign_and_send_transaction(
        [FunctionCallAction("addMessage", {"text": "hi"}, deposit="1")]
    )

    assert outcome == {"status": {"SuccessValue": ""}}
    call = handle.calls[-1]
    assert call[0] == "sign_and_send_transaction"
    assert call[1] == "guest-book.testnet"
    assert call[2] == [
        {"methodName": "addMessage", "args": {"text": "hi"}, "gas": "30000000000000", "deposit": "1"}
    ]


@pytest.mark.asyncio
async def test_unsupported_action_never_reaches_provider(bus, config):
    handle = FakeSender()
    wallet = _sender(bus, config, handle)
    await wallet.connect()

    with pytest.raises(UnsupportedActionError) as exc_info:
        await wallet.sign_and_send_transaction([FunctionCallAction("addMessage"), TransferAction(deposit="1")])

    assert "Transfer" in exc_info.value.message
    assert "Sender" in exc_info.value.message
    assert not any(call[0] == "sign_and_send_transaction" for call in handle.calls)


@pytest.mark.asyncio
async def test_empty_response_is_invalid(bus, config):
    handle = FakeSender(tx_result={"response": []})
    wallet = _sender(bus, config, handle)
    await wallet.connect()

    with pytest.raises(InvalidResponseError):
        await wallet.sign_and_send_transaction([FunctionCallAction("addMessage")])


@pytest.mark.asyncio
async def test_provider_error_on_sign(bus, config):
    handle = FakeSender(tx_result={"error": "User rejected the transaction"})
    wallet = _sender(bus, config, handle)
    await wallet.connect()

    with pytest.raises(ProviderRejectedError) as exc_info:
        await wallet.sign_and_send_transaction([FunctionCallAction("addMessage")])
    assert exc_info.value.message == "User rejected the transaction"


@pytest.mark.asyncio
async def test_sign_and_send_transactions_batch(bus, config):
    handle = FakeSender()
    wallet = _sender(bus, config, handle)
    await wallet.connect()

    outcomes = await wallet.sign_and_send_transactions([
        Transaction("guest-book.testnet", [FunctionCallAction("addMessage")]),
        Transaction("counter.testnet", [FunctionCallAction("increment")]),
    ])

    assert outcomes == [{"id": 1}, {"id": 2}]
    sent = handle.calls[-1][1]
    assert [tx["receiverId"] for tx in sent] == ["guest-book.testnet", "counter.testnet"]


@pytest.mark.asyncio
async def test_sign_and_send_transactions_missing_response(bus, config):
    handle = FakeSender(batch_result={"error": None})
    wallet = _sender(bus, config, handle)
    await wallet.connect()

    with pytest.raises(InvalidResponseError):
        await wallet.sign_and_send_transactions([Transaction("counter.testnet", [FunctionCallAction("increment")])])

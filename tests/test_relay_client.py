"""RelayClient against a mocked HTTP relay."""

from __future__ import annotations

import json

import httpx
import pytest

from relaycall.models.errors import BroadcastingError, InsufficientGasError
from relaycall.models.requests import SignedProtocolCall, SignedTransaction, UnsignedTransaction
from relaycall.models.results import Failure, Success
from relaycall.models.transactions import MetaTransaction, NativeTransaction
from relaycall.relay.client import RelayClient

from tests.factories import make_request, make_unsigned_call

RELAY_URL = "http://relay.test"


def _client(handler) -> RelayClient:
    return RelayClient(RELAY_URL, timeout=5, transport=httpx.MockTransport(handler))


def _signed_call(nonce: int = 7) -> SignedProtocolCall:
    return SignedProtocolCall(call=make_unsigned_call(nonce=nonce), signature="ab" * 32)


def _signed_tx() -> SignedTransaction:
    tx = UnsignedTransaction(
        request=make_request(), nonce=2, signer="GTEST", domain="testnet", max_fee=100,
    )
    return SignedTransaction(transaction=tx, signature="cd" * 32)


# ── Relay ─────────────────────────────────────────────────────────


async def test_relay_success_returns_meta_transaction():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"tx_id": "relay-abc", "tx_hash": "0x123"})

    signed = _signed_call(nonce=7)
    result = await _client(handler).relay_protocol_call(signed)

    assert isinstance(result, Success)
    tx = result.value
    assert isinstance(tx, MetaTransaction)
    assert tx.tx_id == "relay-abc"
    assert tx.tx_hash == "0x123"
    assert tx.nonce == 7
    assert tx.request == signed.request
    assert seen["path"] == "/relay"
    assert seen["body"]["signature"] == signed.signature
    assert seen["body"]["nonce"] == 7


async def test_relay_rejection_carries_reason():
    def handler(request):
        return httpx.Response(422, json={"reason": "insufficient liquidity"})

    result = await _client(handler).relay_protocol_call(_signed_call())

    assert isinstance(result, Failure)
    assert isinstance(result.error, BroadcastingError)
    assert result.error.reason == "insufficient liquidity"


async def test_relay_rejection_without_json_body():
    def handler(request):
        return httpx.Response(503, text="")

    result = await _client(handler).relay_protocol_call(_signed_call())

    assert result.error.reason == "relay HTTP 503"


async def test_relay_transport_error_is_broadcasting_error():
    def handler(request):
        raise httpx.ConnectError("connection refused")

    result = await _client(handler).relay_protocol_call(_signed_call())

    assert isinstance(result.error, BroadcastingError)
    assert "connection refused" in result.error.reason


async def test_relay_malformed_response():
    def handler(request):
        return httpx.Response(200, json={"status": "ok"})

    result = await _client(handler).relay_protocol_call(_signed_call())

    assert isinstance(result.error, BroadcastingError)
    assert "malformed" in result.error.reason


# ── Self-funded broadcast ─────────────────────────────────────────


async def test_broadcast_success_returns_native_transaction():
    def handler(request):
        assert request.url.path == "/transactions"
        return httpx.Response(200, json={"tx_id": "native-1"})

    result = await _client(handler).broadcast_transaction(_signed_tx())

    assert isinstance(result.value, NativeTransaction)
    assert result.value.tx_id == "native-1"
    assert result.value.nonce == 2
    assert result.value.tx_hash is None


async def test_broadcast_payment_required_is_insufficient_gas():
    def handler(request):
        return httpx.Response(402, json={"required": 100, "available": 3})

    result = await _client(handler).broadcast_transaction(_signed_tx())

    assert isinstance(result.error, InsufficientGasError)
    assert result.error.required == 100
    assert result.error.available == 3


async def test_broadcast_rejection():
    def handler(request):
        return httpx.Response(400, json={"reason": "bad sequence"})

    result = await _client(handler).broadcast_transaction(_signed_tx())

    assert isinstance(result.error, BroadcastingError)
    assert result.error.reason == "bad sequence"


# ── Nonces ────────────────────────────────────────────────────────


async def test_get_nonce():
    def handler(request):
        assert request.url.path == "/nonces/GTEST"
        return httpx.Response(200, json={"nonce": 42})

    assert await _client(handler).get_nonce("GTEST") == 42


async def test_get_nonce_raises_on_http_error():
    def handler(request):
        return httpx.Response(500, json={"reason": "db down"})

    with pytest.raises(httpx.HTTPStatusError):
        await _client(handler).get_nonce("GTEST")

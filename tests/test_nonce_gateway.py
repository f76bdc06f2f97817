"""PendingAwareNonceGateway: queue-aware nonces that are never handed out twice."""

from __future__ import annotations

import asyncio

import pytest

from relaycall.gateways.nonce import PendingAwareNonceGateway
from relaycall.tracking.queue import PendingTransactionQueue

from tests.factories import make_meta_transaction
from tests.mocks import MockNonceSource, MockWallet


async def test_first_nonce_comes_from_source():
    gateway = PendingAwareNonceGateway(MockNonceSource(nonce=12))

    assert await gateway.get_nonce_for(MockWallet()) == 12


async def test_sequential_calls_strictly_increase():
    gateway = PendingAwareNonceGateway(MockNonceSource(nonce=5))
    wallet = MockWallet()

    nonces = [await gateway.get_nonce_for(wallet) for _ in range(4)]

    assert nonces == [5, 6, 7, 8]


async def test_source_ahead_of_local_state_wins():
    source = MockNonceSource(nonce=5)
    gateway = PendingAwareNonceGateway(source)
    wallet = MockWallet()
    await gateway.get_nonce_for(wallet)

    source.nonce = 20

    assert await gateway.get_nonce_for(wallet) == 20


async def test_queued_transactions_are_skipped():
    wallet = MockWallet()
    queue = PendingTransactionQueue()
    queue.push(make_meta_transaction("a", nonce=8, signer=wallet.address))
    queue.push(make_meta_transaction("b", nonce=9, signer=wallet.address))
    queue.push(make_meta_transaction("c", nonce=50, signer="GOTHER"))
    gateway = PendingAwareNonceGateway(MockNonceSource(nonce=8), queue)

    assert await gateway.get_nonce_for(wallet) == 10


async def test_concurrent_calls_never_repeat():
    gateway = PendingAwareNonceGateway(MockNonceSource(nonce=0))
    wallet = MockWallet()

    nonces = await asyncio.gather(*(gateway.get_nonce_for(wallet) for _ in range(10)))

    assert sorted(nonces) == list(range(10))


async def test_wallets_are_tracked_separately():
    gateway = PendingAwareNonceGateway(MockNonceSource(nonce=1))
    alice = MockWallet(address="GALICE")
    bob = MockWallet(address="GBOB")

    assert await gateway.get_nonce_for(alice) == 1
    assert await gateway.get_nonce_for(alice) == 2
    assert await gateway.get_nonce_for(bob) == 1


async def test_reset_falls_back_to_source():
    gateway = PendingAwareNonceGateway(MockNonceSource(nonce=3))
    wallet = MockWallet()
    await gateway.get_nonce_for(wallet)
    await gateway.get_nonce_for(wallet)

    await gateway.reset(wallet.address)

    assert await gateway.get_nonce_for(wallet) == 3


async def test_source_errors_propagate():
    gateway = PendingAwareNonceGateway(MockNonceSource(error=ConnectionError("down")))

    with pytest.raises(ConnectionError):
        await gateway.get_nonce_for(MockWallet())


async def test_released_nonce_is_handed_out_again():
    gateway = PendingAwareNonceGateway(MockNonceSource(nonce=7))
    wallet = MockWallet()

    abandoned = await gateway.get_nonce_for(wallet)
    gateway.release_nonce_for(wallet, abandoned)

    assert await gateway.get_nonce_for(wallet) == 7


async def test_release_fills_the_lowest_gap():
    gateway = PendingAwareNonceGateway(MockNonceSource(nonce=7))
    wallet = MockWallet()
    await gateway.get_nonce_for(wallet)
    abandoned = await gateway.get_nonce_for(wallet)
    await gateway.get_nonce_for(wallet)

    gateway.release_nonce_for(wallet, abandoned)

    assert await gateway.get_nonce_for(wallet) == 8
    assert await gateway.get_nonce_for(wallet) == 10


async def test_releasing_an_unknown_nonce_is_harmless():
    gateway = PendingAwareNonceGateway(MockNonceSource(nonce=2))
    wallet = MockWallet()
    await gateway.get_nonce_for(wallet)

    gateway.release_nonce_for(wallet, 40)
    gateway.release_nonce_for(MockWallet(address="GOTHER"), 2)

    assert await gateway.get_nonce_for(wallet) == 3


async def test_leases_expire():
    now = [1000.0]
    gateway = PendingAwareNonceGateway(
        MockNonceSource(nonce=4), lease_ttl=60, clock=lambda: now[0],
    )
    wallet = MockWallet()
    await gateway.get_nonce_for(wallet)

    now[0] += 61

    assert await gateway.get_nonce_for(wallet) == 4


async def test_queued_nonce_replaces_its_lease():
    wallet = MockWallet()
    queue = PendingTransactionQueue()
    gateway = PendingAwareNonceGateway(MockNonceSource(nonce=5), queue)

    nonce = await gateway.get_nonce_for(wallet)
    queue.push(make_meta_transaction("a", nonce=nonce, signer=wallet.address))
    gateway.release_nonce_for(wallet, nonce)

    assert await gateway.get_nonce_for(wallet) == 6

"""Pending-aware nonce gateway with per-address serialization.

The remote nonce only advances once a transaction settles, so on its own it
would hand the same value to every call submitted in between. This gateway
hands out the lowest value at or above the remote nonce that is neither
sitting in the transaction queue nor leased to a call still in flight, under
a per-address lock.

A lease ends when its nonce shows up in the queue, when the remote nonce
passes it, when the caller releases it after abandoning the call, or after
``lease_ttl`` seconds, by which time a signed call has passed its deadline.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

from relaycall.interfaces.nonce import NonceSource
from relaycall.interfaces.wallet import Wallet
from relaycall.models.requests import Nonce
from relaycall.tracking.queue import PendingTransactionQueue

log = logging.getLogger(__name__)


class PendingAwareNonceGateway:
    """Implements NonceGateway."""

    def __init__(
        self,
        source: NonceSource,
        queue: PendingTransactionQueue | None = None,
        lease_ttl: float = 1800,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = source
        self._queue = queue
        self._lease_ttl = lease_ttl
        self._clock = clock
        self._locks: dict[str, asyncio.Lock] = {}
        self._leases: dict[str, dict[Nonce, float]] = {}

    def _lock_for(self, address: str) -> asyncio.Lock:
        return self._locks.setdefault(address, asyncio.Lock())

    async def get_nonce_for(self, wallet: Wallet) -> Nonce:
        address = wallet.address
        async with self._lock_for(address):
            remote = await self._source.get_nonce(address)
            queued = set(self._queue.pending_nonces(address)) if self._queue is not None else set()
            leases = self._leases.setdefault(address, {})

            now = self._clock()
            for leased, expires in list(leases.items()):
                if leased < remote or leased in queued or expires <= now:
                    del leases[leased]

            nonce = remote
            while nonce in queued or nonce in leases:
                nonce += 1

            leases[nonce] = now + self._lease_ttl
            log.debug(
                "Nonce %d for %s (remote=%d, in flight=%d)",
                nonce, address[:16], remote, len(leases),
            )
            return nonce

    def release_nonce_for(self, wallet: Wallet, nonce: Nonce) -> None:
        """Give back a nonce whose call was abandoned before reaching the queue."""
        leases = self._leases.get(wallet.address)
        if leases is not None and leases.pop(nonce, None) is not None:
            log.info("Released nonce %d for %s", nonce, wallet.address[:16])

    async def reset(self, address: str) -> None:
        """Forget every lease for ``address``."""
        async with self._lock_for(address):
            self._leases.pop(address, None)
        log.info("Nonce state reset for %s", address[:16])

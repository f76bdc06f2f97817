"""Nonce protocols."""

from __future__ import annotations

from typing import Protocol

from relaycall.interfaces.wallet import Wallet
from relaycall.models.requests import Nonce


class NonceGateway(Protocol):
    """Single source of truth for the next usable nonce per wallet.

    A value handed out for one wallet is not handed out again until it is
    confirmed or released, even under concurrent calls.
    """

    async def get_nonce_for(self, wallet: Wallet) -> Nonce:
        ...

    def release_nonce_for(self, wallet: Wallet, nonce: Nonce) -> None:
        """The call using ``nonce`` was abandoned; the value may be reused."""
        ...


class NonceSource(Protocol):
    """Remote view of the next nonce an address may use."""

    async def get_nonce(self, address: str) -> Nonce:
        ...

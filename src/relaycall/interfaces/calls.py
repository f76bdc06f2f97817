"""Call construction protocols."""

from __future__ import annotations

from typing import Generic, Protocol

from relaycall.interfaces.wallet import Wallet
from relaycall.models.requests import Nonce, T, UnsignedProtocolCall, UnsignedTransaction


class UnsignedCallGateway(Protocol, Generic[T]):
    """Builds unsigned protocol calls from domain requests."""

    async def create_unsigned_protocol_call(
        self, request: T, nonce: Nonce | None = None
    ) -> UnsignedProtocolCall[T]:
        """Build the call. A given ``nonce`` overrides any the gateway would pick."""
        ...


class SelfFundedTransactionGateway(Protocol, Generic[T]):
    """Builds transactions the user's wallet signs and pays for."""

    async def prepare_self_funded_transaction(
        self, request: T, wallet: Wallet
    ) -> UnsignedTransaction[T]:
        ...

    def release_self_funded_transaction(
        self, transaction: UnsignedTransaction[T], wallet: Wallet
    ) -> None:
        """The transaction was never sent; free whatever it reserved."""
        ...

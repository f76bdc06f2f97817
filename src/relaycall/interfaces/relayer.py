"""Relay protocols - hand signed payloads to the outside world."""

from __future__ import annotations

from typing import Generic, Protocol, Union

from relaycall.models.errors import BroadcastingError, InsufficientGasError
from relaycall.models.requests import SignedProtocolCall, SignedTransaction, T
from relaycall.models.results import Result
from relaycall.models.transactions import MetaTransaction, NativeTransaction


class CallRelayer(Protocol, Generic[T]):
    """Submits signed calls to a gas-sponsoring relay.

    No retries happen at this layer; the caller decides.
    """

    async def relay_protocol_call(
        self, signed_call: SignedProtocolCall[T]
    ) -> Result[MetaTransaction[T], BroadcastingError]:
        ...


class TransactionBroadcaster(Protocol):
    """Broadcasts self-funded transactions signed by the user."""

    async def broadcast_transaction(
        self, signed: SignedTransaction
    ) -> Result[NativeTransaction, Union[InsufficientGasError, BroadcastingError]]:
        ...

"""Wallet protocols - the user's signing identity and who is connected."""

from __future__ import annotations

from typing import Protocol, Union

from relaycall.models.errors import (
    BroadcastingError,
    InsufficientGasError,
    SigningError,
)
from relaycall.models.requests import (
    SignedProtocolCall,
    UnsignedProtocolCall,
    UnsignedTransaction,
)
from relaycall.models.results import Result
from relaycall.models.transactions import NativeTransaction

SendTransactionError = Union[SigningError, InsufficientGasError, BroadcastingError]


class Wallet(Protocol):
    """Signs protocol calls on behalf of the user.

    Failures are reported as values from the closed SigningError set; any
    lower-level transport problem is mapped into one of them.
    """

    @property
    def address(self) -> str:
        ...

    async def sign_protocol_call(
        self, call: UnsignedProtocolCall
    ) -> Result[SignedProtocolCall, SigningError]:
        """Ask the user to sign a call for the relay."""
        ...

    async def send_transaction(
        self, transaction: UnsignedTransaction
    ) -> Result[NativeTransaction, SendTransactionError]:
        """Sign and broadcast a transaction the wallet pays for itself."""
        ...


class ActiveWallet(Protocol):
    """Read accessor for the currently connected wallet."""

    def get_active_wallet(self) -> Wallet | None:
        """Return the connected wallet, or None when nobody is connected."""
        ...

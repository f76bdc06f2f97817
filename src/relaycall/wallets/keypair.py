"""Keypair wallet - signs calls with a local Stellar ed25519 keypair."""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Awaitable, Callable

from stellar_sdk import Keypair

from relaycall.interfaces.relayer import TransactionBroadcaster
from relaycall.models.errors import (
    BroadcastingError,
    PendingSigningRequestError,
    SigningError,
    UserRejectedError,
    WalletConnectionError,
    WalletConnectionErrorReason,
)
from relaycall.models.requests import (
    SignedProtocolCall,
    SignedTransaction,
    UnsignedProtocolCall,
    UnsignedTransaction,
)
from relaycall.models.results import Failure, Result, failure, success

log = logging.getLogger(__name__)

Approver = Callable[[dict[str, Any]], Awaitable[bool]]


def canonical_bytes(message: dict[str, Any]) -> bytes:
    """Deterministic encoding of a message before hashing."""
    return json.dumps(message, sort_keys=True, separators=(",", ":")).encode("utf-8")


def message_digest(message: dict[str, Any]) -> bytes:
    return hashlib.sha256(canonical_bytes(message)).digest()


class KeypairWallet:
    """Implements Wallet on top of a ``stellar_sdk.Keypair``.

    ``approve`` stands in for the human confirmation step: it receives the
    message about to be signed and returns False to decline. Only one prompt
    may be open at a time.
    """

    def __init__(
        self,
        keypair: Keypair,
        network: str,
        broadcaster: TransactionBroadcaster | None = None,
        approve: Approver | None = None,
    ) -> None:
        self._keypair = keypair
        self._network = network
        self._broadcaster = broadcaster
        self._approve = approve
        self._connected = True
        self._prompt_open = False

    @property
    def address(self) -> str:
        return self._keypair.public_key

    @property
    def network(self) -> str:
        return self._network

    def disconnect(self) -> None:
        self._connected = False

    def reconnect(self) -> None:
        self._connected = True

    async def sign_protocol_call(
        self, call: UnsignedProtocolCall
    ) -> Result[SignedProtocolCall, SigningError]:
        signature = await self._sign(call.signer, call.domain, call.to_message())
        if isinstance(signature, Failure):
            return signature
        return success(SignedProtocolCall(call=call, signature=signature.value))

    async def send_transaction(self, transaction: UnsignedTransaction) -> Result[Any, Any]:
        signature = await self._sign(
            transaction.signer, transaction.domain, transaction.to_message(),
        )
        if isinstance(signature, Failure):
            return signature
        if self._broadcaster is None:
            return failure(BroadcastingError("wallet has no broadcaster configured"))
        signed = SignedTransaction(transaction=transaction, signature=signature.value)
        return await self._broadcaster.broadcast_transaction(signed)

    async def _sign(
        self, signer: str, domain: str, message: dict[str, Any]
    ) -> Result[str, SigningError]:
        if self._prompt_open:
            return failure(PendingSigningRequestError())

        error = self._check_connection(signer, domain)
        if error is not None:
            log.warning("Wallet %s cannot sign: %s", self.address[:16], error.reason.value)
            return failure(error)

        self._prompt_open = True
        try:
            if self._approve is not None:
                try:
                    approved = await self._approve(message)
                except Exception:
                    log.exception("Approval prompt failed for %s", self.address[:16])
                    return failure(UserRejectedError())
                if not approved:
                    log.info("Signing request declined for %s", self.address[:16])
                    return failure(UserRejectedError())
            signature = self._keypair.sign(message_digest(message))
        finally:
            self._prompt_open = False

        return success(signature.hex())

    def _check_connection(self, signer: str, domain: str) -> WalletConnectionError | None:
        if not self._connected:
            return WalletConnectionError(WalletConnectionErrorReason.NO_CONNECTION)
        if not self._keypair.can_sign():
            return WalletConnectionError(WalletConnectionErrorReason.STALE_WALLET)
        if signer != self.address:
            return WalletConnectionError(WalletConnectionErrorReason.WRONG_ACCOUNT)
        if domain != self._network:
            return WalletConnectionError(WalletConnectionErrorReason.INCORRECT_CHAIN)
        return None

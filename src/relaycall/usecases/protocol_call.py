"""ProtocolCallUseCase - sign a protocol call and hand it to the relay."""

from __future__ import annotations

import logging
from typing import Generic

from relaycall.interfaces.calls import UnsignedCallGateway
from relaycall.interfaces.nonce import NonceGateway
from relaycall.interfaces.presenter import Presenter
from relaycall.interfaces.queue import TransactionQueue
from relaycall.interfaces.relayer import CallRelayer
from relaycall.interfaces.wallet import ActiveWallet, Wallet
from relaycall.models.errors import WalletConnectionError, WalletConnectionErrorReason
from relaycall.models.requests import Nonce, T
from relaycall.models.results import Failure, failure, success

log = logging.getLogger(__name__)


class ProtocolCallUseCase(Generic[T]):
    """Submits one gas-sponsored protocol call per ``execute``.

    Steps run strictly in order and the first failure is presented as-is:
    active wallet, nonce, unsigned call, signature, relay, queue push.
    A nonce drawn for a call that never reaches the queue is released.
    The instance keeps no state between calls, so concurrent ``execute``
    calls are fine as long as the nonce gateway serializes its allocations.
    """

    def __init__(
        self,
        active_wallet: ActiveWallet,
        nonce_gateway: NonceGateway,
        unsigned_call_gateway: UnsignedCallGateway[T],
        relayer: CallRelayer[T],
        transaction_queue: TransactionQueue[T],
        presenter: Presenter,
    ) -> None:
        self._active_wallet = active_wallet
        self._nonce_gateway = nonce_gateway
        self._unsigned_call_gateway = unsigned_call_gateway
        self._relayer = relayer
        self._transaction_queue = transaction_queue
        self._presenter = presenter

    async def execute(self, request: T) -> None:
        # 1. Active wallet
        wallet = self._active_wallet.get_active_wallet()
        if wallet is None:
            log.warning("No active wallet for %s request", request.kind)
            self._presenter.present(
                failure(WalletConnectionError(WalletConnectionErrorReason.NO_CONNECTION))
            )
            return

        # 2. Nonce; failures pass through untouched
        try:
            nonce = await self._nonce_gateway.get_nonce_for(wallet)
        except Exception as exc:
            log.error("Could not get a nonce for %s call: %s", request.kind, exc, exc_info=True)
            self._presenter.present(failure(exc))
            return

        # 3. Unsigned call
        try:
            unsigned_call = await self._unsigned_call_gateway.create_unsigned_protocol_call(
                request, nonce=nonce,
            )
        except Exception as exc:
            log.error("Could not prepare %s call: %s", request.kind, exc, exc_info=True)
            self._abandon(wallet, nonce)
            self._presenter.present(failure(exc))
            return

        if unsigned_call.signer != wallet.address:
            log.warning(
                "Active wallet changed while preparing %s call (nonce for %s, call for %s)",
                request.kind, wallet.address[:16], unsigned_call.signer[:16],
            )
            self._abandon(wallet, nonce)
            self._presenter.present(
                failure(WalletConnectionError(WalletConnectionErrorReason.WRONG_ACCOUNT))
            )
            return

        log.info(
            "Prepared %s call for %s (nonce=%d)", request.kind, wallet.address[:16], nonce,
        )

        # 4. Signature (user interaction)
        signed = await wallet.sign_protocol_call(unsigned_call)
        if isinstance(signed, Failure):
            log.warning("Signing failed for %s call: %s", request.kind, signed.error)
            self._abandon(wallet, nonce)
            self._presenter.present(signed)
            return

        # 5. Relay
        relayed = await self._relayer.relay_protocol_call(signed.value)
        if isinstance(relayed, Failure):
            log.error("Relay rejected %s call: %s", request.kind, relayed.error)
            self._abandon(wallet, nonce)
            self._presenter.present(relayed)
            return

        # 6. Track
        transaction = relayed.value
        self._transaction_queue.push(transaction)
        log.info("Relayed %s call as %s (nonce=%d)", request.kind, transaction.tx_id, nonce)

        # 7. Done
        self._presenter.present(success())

    def _abandon(self, wallet: Wallet, nonce: Nonce) -> None:
        try:
            self._nonce_gateway.release_nonce_for(wallet, nonce)
        except Exception:
            log.exception("Could not release nonce %d for %s", nonce, wallet.address[:16])

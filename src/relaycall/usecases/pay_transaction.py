"""PayTransaction - submit a request as a self-funded transaction."""

from __future__ import annotations

import logging
from typing import Generic

from relaycall.interfaces.calls import SelfFundedTransactionGateway
from relaycall.interfaces.presenter import Presenter
from relaycall.interfaces.queue import TransactionQueue
from relaycall.interfaces.wallet import ActiveWallet
from relaycall.models.errors import WalletConnectionError, WalletConnectionErrorReason
from relaycall.models.requests import T
from relaycall.models.results import Failure, failure, success

log = logging.getLogger(__name__)


class PayTransaction(Generic[T]):
    """The user's wallet signs, broadcasts and pays for the transaction.

    Same shape as the relayed flow minus the relay: the wallet reports
    InsufficientGasError in addition to the signing errors.
    """

    def __init__(
        self,
        active_wallet: ActiveWallet,
        gateway: SelfFundedTransactionGateway[T],
        presenter: Presenter,
        transaction_queue: TransactionQueue[T],
    ) -> None:
        self._active_wallet = active_wallet
        self._gateway = gateway
        self._presenter = presenter
        self._transaction_queue = transaction_queue

    async def execute(self, request: T) -> None:
        wallet = self._active_wallet.get_active_wallet()
        if wallet is None:
            log.warning("No active wallet for self-funded %s request", request.kind)
            self._presenter.present(
                failure(WalletConnectionError(WalletConnectionErrorReason.NO_CONNECTION))
            )
            return

        try:
            unsigned = await self._gateway.prepare_self_funded_transaction(request, wallet)
        except Exception as exc:
            log.error("Could not prepare self-funded %s: %s", request.kind, exc, exc_info=True)
            self._presenter.present(failure(exc))
            return

        sent = await wallet.send_transaction(unsigned)
        if isinstance(sent, Failure):
            log.warning("Self-funded %s not sent: %s", request.kind, sent.error)
            try:
                self._gateway.release_self_funded_transaction(unsigned, wallet)
            except Exception:
                log.exception("Could not release self-funded %s", request.kind)
            self._presenter.present(sent)
            return

        self._transaction_queue.push(sent.value)
        log.info("Broadcast self-funded %s as %s", request.kind, sent.value.tx_id)
        self._presenter.present(success())

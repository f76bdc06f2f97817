"""Application wiring - builds every component from configuration."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from stellar_sdk import Keypair

from relaycall.gateways.calls import LocalSelfFundedGateway, LocalUnsignedCallGateway
from relaycall.gateways.nonce import PendingAwareNonceGateway
from relaycall.models.config import RelayConfig
from relaycall.models.errors import ConfigurationError
from relaycall.models.requests import TransactionRequest
from relaycall.models.results import Result
from relaycall.relay.client import RelayClient
from relaycall.storage.sqlite import SQLiteQueueStorage
from relaycall.tracking.queue import PendingTransactionQueue
from relaycall.usecases.pay_transaction import PayTransaction
from relaycall.usecases.presenter import ResultPresenter
from relaycall.usecases.protocol_call import ProtocolCallUseCase
from relaycall.wallets.keypair import Approver, KeypairWallet
from relaycall.wallets.session import WalletSession

log = logging.getLogger(__name__)


class RelayApp:
    """Owns the long-lived collaborators shared by every submission.

    Use cases and presenters are built per call; the wallet session, nonce
    gateway and queue outlive them.
    """

    def __init__(
        self,
        cfg: RelayConfig,
        approve: Approver | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not cfg.keypair_secret:
            raise ConfigurationError("no keypair secret configured")
        self._cfg = cfg

        try:
            keypair = Keypair.from_secret(cfg.keypair_secret)
        except Exception as exc:
            raise ConfigurationError(f"invalid keypair secret: {exc}") from exc

        self.relay = RelayClient(cfg.relay_url, cfg.request_timeout, transport=transport)
        self.storage = SQLiteQueueStorage(cfg.db_path)
        self.queue: PendingTransactionQueue[TransactionRequest] = PendingTransactionQueue(
            self.storage,
        )
        self.session = WalletSession()
        self.wallet = KeypairWallet(
            keypair, cfg.network, broadcaster=self.relay, approve=approve,
        )
        self.nonces = PendingAwareNonceGateway(self.relay, self.queue, lease_ttl=cfg.call_ttl)
        self.calls: LocalUnsignedCallGateway[TransactionRequest] = LocalUnsignedCallGateway(
            self.session, cfg.network, cfg.call_ttl,
        )
        self.self_funded: LocalSelfFundedGateway[TransactionRequest] = LocalSelfFundedGateway(
            self.nonces, cfg.network, cfg.max_fee,
        )

    async def start(self) -> None:
        log.info("Starting relaycall")
        log.info("  Network: %s", self._cfg.network)
        log.info("  Relay:   %s", self._cfg.relay_url)
        log.info("  Address: %s", self.wallet.address)
        await self.storage.initialize()
        await self.queue.restore()
        self.session.connect(self.wallet)

    async def close(self) -> None:
        await self.queue.flush()
        await self.storage.close()
        log.info("relaycall shut down cleanly")

    async def submit(self, request: TransactionRequest) -> Result[Any, Any]:
        """Relay a gas-sponsored protocol call."""
        presenter = ResultPresenter()
        use_case = ProtocolCallUseCase(
            self.session, self.nonces, self.calls, self.relay, self.queue, presenter,
        )
        await use_case.execute(request)
        return await presenter.as_result()

    async def pay(self, request: TransactionRequest) -> Result[Any, Any]:
        """Send a self-funded transaction."""
        presenter = ResultPresenter()
        use_case = PayTransaction(self.session, self.self_funded, presenter, self.queue)
        await use_case.execute(request)
        return await presenter.as_result()

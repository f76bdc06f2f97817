"""Local builders for unsigned protocol calls and self-funded transactions."""

from __future__ import annotations

import logging
import time
from typing import Callable, Generic

from relaycall.interfaces.nonce import NonceGateway
from relaycall.interfaces.wallet import ActiveWallet, Wallet
from relaycall.models.errors import WalletConnectionError, WalletConnectionErrorReason
from relaycall.models.requests import Nonce, T, UnsignedProtocolCall, UnsignedTransaction

log = logging.getLogger(__name__)


class LocalUnsignedCallGateway(Generic[T]):
    """Implements UnsignedCallGateway.

    The call is bound to the active wallet, the configured network and a
    deadline ``call_ttl`` seconds out. An explicit ``nonce`` always wins; the
    fallback gateway is only consulted when none is given.
    """

    def __init__(
        self,
        active_wallet: ActiveWallet,
        network: str,
        call_ttl: int = 1800,
        fallback_nonces: NonceGateway | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._active_wallet = active_wallet
        self._network = network
        self._call_ttl = call_ttl
        self._fallback_nonces = fallback_nonces
        self._clock = clock

    async def create_unsigned_protocol_call(
        self, request: T, nonce: Nonce | None = None
    ) -> UnsignedProtocolCall[T]:
        wallet = self._active_wallet.get_active_wallet()
        if wallet is None:
            raise WalletConnectionError(WalletConnectionErrorReason.NO_CONNECTION)

        if nonce is None:
            if self._fallback_nonces is None:
                raise ValueError("no nonce given and no fallback nonce gateway configured")
            nonce = await self._fallback_nonces.get_nonce_for(wallet)

        return UnsignedProtocolCall(
            request=request,
            nonce=nonce,
            signer=wallet.address,
            domain=self._network,
            deadline=int(self._clock()) + self._call_ttl,
        )


class LocalSelfFundedGateway(Generic[T]):
    """Implements SelfFundedTransactionGateway."""

    def __init__(self, nonce_gateway: NonceGateway, network: str, max_fee: int) -> None:
        self._nonce_gateway = nonce_gateway
        self._network = network
        self._max_fee = max_fee

    async def prepare_self_funded_transaction(
        self, request: T, wallet: Wallet
    ) -> UnsignedTransaction[T]:
        nonce = await self._nonce_gateway.get_nonce_for(wallet)
        log.debug("Self-funded %s for %s (nonce=%d)", request.kind, wallet.address[:16], nonce)
        return UnsignedTransaction(
            request=request,
            nonce=nonce,
            signer=wallet.address,
            domain=self._network,
            max_fee=self._max_fee,
        )

    def release_self_funded_transaction(
        self, transaction: UnsignedTransaction[T], wallet: Wallet
    ) -> None:
        self._nonce_gateway.release_nonce_for(wallet, transaction.nonce)

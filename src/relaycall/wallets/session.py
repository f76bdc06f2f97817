"""Wallet session - tracks which wallet is currently connected."""

from __future__ import annotations

import logging

from relaycall.interfaces.wallet import Wallet

log = logging.getLogger(__name__)


class WalletSession:
    """Implements ActiveWallet."""

    def __init__(self, wallet: Wallet | None = None) -> None:
        self._wallet = wallet

    def get_active_wallet(self) -> Wallet | None:
        return self._wallet

    def connect(self, wallet: Wallet) -> None:
        old = self._wallet
        self._wallet = wallet
        if old is None or old.address != wallet.address:
            log.info("Active wallet: %s", wallet.address)

    def disconnect(self) -> None:
        if self._wallet is not None:
            log.info("Wallet %s disconnected", self._wallet.address)
        self._wallet = None

"""Wallet implementations."""

from relaycall.wallets.keypair import KeypairWallet, canonical_bytes, message_digest
from relaycall.wallets.session import WalletSession

__all__ = ["KeypairWallet", "WalletSession", "canonical_bytes", "message_digest"]

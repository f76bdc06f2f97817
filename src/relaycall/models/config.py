"""Configuration model."""

from __future__ import annotations

from dataclasses import dataclass

NETWORK_PASSPHRASES = {
    "testnet": "Test SDF Network ; September 2015",
    "mainnet": "Public Global Stellar Network ; September 2015",
}


@dataclass
class RelayConfig:
    """Complete relaycall configuration."""

    # Relay
    relay_url: str = "http://127.0.0.1:8080"
    request_timeout: int = 30  # seconds

    # Wallet
    network: str = "testnet"
    keypair_secret: str = ""  # loaded from env var RELAYCALL_SECRET

    # Calls
    call_ttl: int = 1800  # seconds a signed call stays valid
    max_fee: int = 100_000  # self-funded fee ceiling, smallest unit

    # Storage
    db_path: str = "~/.relaycall/queue.db"

    # Logging
    log_level: str = "info"

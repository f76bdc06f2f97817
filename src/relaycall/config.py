"""Configuration loading: TOML file + environment variables."""

from __future__ import annotations

import os
from pathlib import Path

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from relaycall.models.config import NETWORK_PASSPHRASES, RelayConfig
from relaycall.models.errors import ConfigurationError


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "RELAYCALL_",
) -> RelayConfig:
    """Load configuration from a TOML file and env vars.

    Priority (highest wins):
        1. Environment variables (RELAYCALL_SECRET, etc.)
        2. TOML config file
        3. Defaults from RelayConfig
    """
    raw: dict = {}
    if config_path is not None:
        p = Path(config_path).expanduser()
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    cfg = RelayConfig()

    # ── Relay section ──────────────────────────────────────
    relay = raw.get("relay", {})
    if v := relay.get("url"):
        cfg.relay_url = str(v)
    if v := relay.get("request_timeout"):
        cfg.request_timeout = int(v)

    # ── Wallet section ─────────────────────────────────────
    wallet = raw.get("wallet", {})
    if v := wallet.get("network"):
        cfg.network = str(v)
    if v := wallet.get("keypair_secret"):
        cfg.keypair_secret = str(v)

    # ── Calls section ──────────────────────────────────────
    calls = raw.get("calls", {})
    if v := calls.get("ttl"):
        cfg.call_ttl = int(v)
    if v := calls.get("max_fee"):
        cfg.max_fee = int(v)

    # ── Storage section ────────────────────────────────────
    storage = raw.get("storage", {})
    if v := storage.get("db_path"):
        cfg.db_path = str(v)

    # ── Logging section ────────────────────────────────────
    logging_raw = raw.get("logging", {})
    if v := logging_raw.get("level"):
        cfg.log_level = str(v)

    # ── Environment variable overrides (highest priority) ──
    if secret := os.environ.get(f"{env_prefix}SECRET"):
        cfg.keypair_secret = secret
    if url := os.environ.get(f"{env_prefix}RELAY_URL"):
        cfg.relay_url = url
    if net := os.environ.get(f"{env_prefix}NETWORK"):
        cfg.network = net
    if db := os.environ.get(f"{env_prefix}DB_PATH"):
        cfg.db_path = db

    if cfg.network not in NETWORK_PASSPHRASES:
        raise ConfigurationError(f"unknown network: {cfg.network!r}")
    if cfg.call_ttl <= 0:
        raise ConfigurationError("calls.ttl must be positive")

    if cfg.db_path != ":memory:":
        cfg.db_path = str(Path(cfg.db_path).expanduser())

    return cfg

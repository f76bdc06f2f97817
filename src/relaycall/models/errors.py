"""Error taxonomy for protocol call submission.

Hierarchy:
    RelayCallError (root)
    ├── PendingSigningRequestError   wallet already has a prompt open
    ├── WalletConnectionError        wallet state prevents signing
    ├── UserRejectedError            user declined the prompt
    ├── BroadcastingError            relay could not accept the call
    ├── InsufficientGasError         self-funded wallet cannot pay the fee
    └── ConfigurationError

Use cases exchange these as values inside a ``Failure``; adapters may raise
``ConfigurationError`` at start-up.
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class WalletConnectionErrorReason(str, Enum):
    """Why a wallet cannot sign right now."""

    INCORRECT_CHAIN = "incorrect_chain"
    NO_CONNECTION = "no_connection"
    STALE_WALLET = "stale_wallet"
    WRONG_ACCOUNT = "wrong_account"


class RelayCallError(Exception):
    """Root class for all relaycall errors."""


class PendingSigningRequestError(RelayCallError):
    """A previous signing request is still awaiting the user."""

    def __init__(self) -> None:
        super().__init__("a signing request is already pending")


class WalletConnectionError(RelayCallError):
    """The wallet is not in a state where it can sign."""

    def __init__(self, reason: WalletConnectionErrorReason) -> None:
        self.reason = reason
        super().__init__(f"wallet connection error: {reason.value}")


class UserRejectedError(RelayCallError):
    """The user explicitly declined the signing request."""

    def __init__(self) -> None:
        super().__init__("user rejected the request")


class BroadcastingError(RelayCallError):
    """The relay (or node) did not accept the transaction."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"broadcasting failed: {reason}")


class InsufficientGasError(RelayCallError):
    """The signer's balance does not cover the transaction fee."""

    def __init__(self, required: int | None = None, available: int | None = None) -> None:
        self.required = required
        self.available = available
        detail = ""
        if required is not None:
            detail = f" (required={required}, available={available})"
        super().__init__(f"insufficient funds for gas{detail}")


class ConfigurationError(RelayCallError):
    """Missing or invalid configuration."""


SigningError = Union[PendingSigningRequestError, WalletConnectionError, UserRejectedError]

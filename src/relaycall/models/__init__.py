"""Data models for relaycall."""

from relaycall.models.requests import (
    Nonce,
    SignedProtocolCall,
    SignedTransaction,
    TransactionRequest,
    UnsignedProtocolCall,
    UnsignedTransaction,
)
from relaycall.models.transactions import (
    BroadcastedTransaction,
    MetaTransaction,
    NativeTransaction,
)
from relaycall.models.errors import (
    BroadcastingError,
    ConfigurationError,
    InsufficientGasError,
    PendingSigningRequestError,
    RelayCallError,
    SigningError,
    UserRejectedError,
    WalletConnectionError,
    WalletConnectionErrorReason,
)
from relaycall.models.results import Failure, Result, Success, failure, success
from relaycall.models.config import RelayConfig

__all__ = [
    "Nonce", "TransactionRequest",
    "UnsignedProtocolCall", "SignedProtocolCall",
    "UnsignedTransaction", "SignedTransaction",
    "BroadcastedTransaction", "MetaTransaction", "NativeTransaction",
    "RelayCallError", "PendingSigningRequestError", "WalletConnectionError",
    "WalletConnectionErrorReason", "UserRejectedError", "BroadcastingError",
    "InsufficientGasError", "ConfigurationError", "SigningError",
    "Result", "Success", "Failure", "success", "failure",
    "RelayConfig",
]

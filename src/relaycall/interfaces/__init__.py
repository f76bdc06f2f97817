"""Protocol interfaces for all relaycall collaborators."""

from relaycall.interfaces.wallet import ActiveWallet, SendTransactionError, Wallet
from relaycall.interfaces.nonce import NonceGateway, NonceSource
from relaycall.interfaces.calls import SelfFundedTransactionGateway, UnsignedCallGateway
from relaycall.interfaces.relayer import CallRelayer, TransactionBroadcaster
from relaycall.interfaces.queue import QueueStorage, TransactionQueue
from relaycall.interfaces.presenter import Presenter

__all__ = [
    "Wallet", "ActiveWallet", "SendTransactionError",
    "NonceGateway", "NonceSource",
    "UnsignedCallGateway", "SelfFundedTransactionGateway",
    "CallRelayer", "TransactionBroadcaster",
    "TransactionQueue", "QueueStorage",
    "Presenter",
]

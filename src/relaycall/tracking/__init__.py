"""Tracking of submitted transactions until they settle."""

from relaycall.tracking.queue import PendingTransactionQueue, QueueListener

__all__ = ["PendingTransactionQueue", "QueueListener"]

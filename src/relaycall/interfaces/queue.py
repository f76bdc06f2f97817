"""Transaction queue protocols."""

from __future__ import annotations

from typing import Any, Generic, Protocol

from relaycall.models.requests import T
from relaycall.models.transactions import BroadcastedTransaction


class TransactionQueue(Protocol, Generic[T]):
    """Ordered registry of submitted-but-unsettled transactions."""

    def push(self, transaction: BroadcastedTransaction[T]) -> None:
        """Append a transaction. Never fails for the caller."""
        ...


class QueueStorage(Protocol):
    """Persists the queue as an ordered list of JSON-safe records."""

    async def get(self) -> list[dict[str, Any]] | None:
        ...

    async def set(self, records: list[dict[str, Any]]) -> None:
        ...

    async def reset(self) -> None:
        ...

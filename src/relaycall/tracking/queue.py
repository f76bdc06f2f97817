"""In-memory transaction queue with optional persistence."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Generic, Iterator

from relaycall.interfaces.queue import QueueStorage
from relaycall.models.requests import Nonce, T
from relaycall.models.transactions import BroadcastedTransaction

log = logging.getLogger(__name__)

QueueListener = Callable[[list[BroadcastedTransaction[Any]]], None]


class PendingTransactionQueue(Generic[T]):
    """Implements TransactionQueue.

    Entries are kept oldest-first. ``push`` is a plain append followed by
    listener notification, so interleaved pushes from concurrent tasks on
    one event loop cannot lose entries. When a storage is attached, each
    change schedules a snapshot write; write failures are logged and kept
    inside the queue.
    """

    def __init__(self, storage: QueueStorage | None = None) -> None:
        self._storage = storage
        self._entries: list[BroadcastedTransaction[T]] = []
        self._listeners: list[QueueListener] = []
        self._writes: set[asyncio.Task[None]] = set()
        self._write_lock = asyncio.Lock()

    # ── Append ─────────────────────────────────────────────

    def push(self, transaction: BroadcastedTransaction[T]) -> None:
        self._entries.append(transaction)
        log.debug("Queued %s (%d pending)", transaction.tx_id, len(self._entries))
        self._changed()

    # ── Read ───────────────────────────────────────────────

    def pending(self) -> list[BroadcastedTransaction[T]]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[BroadcastedTransaction[T]]:
        return iter(list(self._entries))

    def get(self, tx_id: str) -> BroadcastedTransaction[T] | None:
        for entry in self._entries:
            if entry.tx_id == tx_id:
                return entry
        return None

    def find(self, request: T) -> BroadcastedTransaction[T] | None:
        """Oldest pending transaction for a structurally equal request."""
        for entry in self._entries:
            if entry.request == request:
                return entry
        return None

    def pending_nonces(self, signer: str) -> list[Nonce]:
        return [e.nonce for e in self._entries if e.signer == signer]

    def subscribe(self, listener: QueueListener) -> Callable[[], None]:
        """Call ``listener`` with a snapshot after every change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Reconciliation ─────────────────────────────────────

    def settle(self, tx_id: str) -> BroadcastedTransaction[T] | None:
        """Remove a transaction observed as settled on-chain."""
        entry = self._remove(tx_id)
        if entry:
            log.info("Settled %s", tx_id)
        return entry

    def drop(self, tx_id: str) -> BroadcastedTransaction[T] | None:
        """Remove a transaction observed as failed or abandoned."""
        entry = self._remove(tx_id)
        if entry:
            log.warning("Dropped %s (nonce=%d)", tx_id, entry.nonce)
        return entry

    def _remove(self, tx_id: str) -> BroadcastedTransaction[T] | None:
        entry = self.get(tx_id)
        if entry is None:
            return None
        self._entries.remove(entry)
        self._changed()
        return entry

    # ── Persistence ────────────────────────────────────────

    async def restore(self) -> int:
        """Load entries saved by a previous run. Returns how many were loaded."""
        if self._storage is None:
            return 0
        records = await self._storage.get() or []
        restored = []
        for record in records:
            try:
                restored.append(BroadcastedTransaction.from_record(record))
            except (KeyError, TypeError, ValueError) as exc:
                log.warning("Skipping unreadable queue record: %s", exc)
        self._entries = restored + self._entries
        if restored:
            log.info("Restored %d pending transactions", len(restored))
        return len(restored)

    async def flush(self) -> None:
        """Wait for scheduled writes to finish."""
        while self._writes:
            await asyncio.gather(*list(self._writes))

    def _changed(self) -> None:
        snapshot = list(self._entries)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as exc:
                log.error("Queue listener failed: %s", exc, exc_info=True)
        if self._storage is not None:
            self._schedule_write([e.to_record() for e in snapshot])

    def _schedule_write(self, records: list[dict[str, Any]]) -> None:
        task = asyncio.get_running_loop().create_task(self._write(records))
        self._writes.add(task)
        task.add_done_callback(self._writes.discard)

    async def _write(self, records: list[dict[str, Any]]) -> None:
        assert self._storage is not None
        async with self._write_lock:
            try:
                await self._storage.set(records)
            except Exception as exc:
                log.error("Failed to persist transaction queue: %s", exc)

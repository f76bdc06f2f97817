"""SQLiteQueueStorage and its use as the queue's backing store."""

from __future__ import annotations

from relaycall.storage.sqlite import SQLiteQueueStorage
from relaycall.tracking.queue import PendingTransactionQueue

from tests.factories import make_meta_transaction, make_native_transaction, make_request


async def test_empty_storage_returns_none(storage):
    assert await storage.get() is None


async def test_set_replaces_snapshot_in_order(storage):
    a = make_meta_transaction("a", nonce=1).to_record()
    b = make_meta_transaction("b", nonce=2).to_record()
    c = make_native_transaction("c", nonce=3).to_record()

    await storage.set([a, b])
    await storage.set([b, c])

    assert await storage.get() == [b, c]


async def test_set_empty_list_clears(storage):
    await storage.set([make_meta_transaction("a").to_record()])
    await storage.set([])

    assert await storage.get() is None


async def test_reset(storage):
    await storage.set([make_meta_transaction("a").to_record()])
    await storage.reset()

    assert await storage.get() is None


async def test_queue_survives_restart(tmp_path):
    db_path = str(tmp_path / "nested" / "queue.db")
    request = make_request("post", content="persist me")

    storage = SQLiteQueueStorage(db_path)
    await storage.initialize()
    queue = PendingTransactionQueue(storage)
    queue.push(make_meta_transaction("a", request=request, nonce=1))
    queue.push(make_native_transaction("b", nonce=2))
    queue.settle("b")
    queue.push(make_meta_transaction("c", nonce=3))
    await queue.flush()
    await storage.close()

    storage = SQLiteQueueStorage(db_path)
    await storage.initialize()
    restored = PendingTransactionQueue(storage)
    try:
        assert await restored.restore() == 2
        assert [tx.tx_id for tx in restored] == ["a", "c"]
        assert restored.find(request).nonce == 1
    finally:
        await storage.close()

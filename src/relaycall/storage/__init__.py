"""Persistence backends."""

from relaycall.storage.sqlite import SQLiteQueueStorage

__all__ = ["SQLiteQueueStorage"]

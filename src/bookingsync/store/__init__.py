"""Durable booking stores.

Usage:
    from bookingsync.store import JsonFileStore

    store = JsonFileStore("~/.bookingsync/store.json")
    pending = await store.get(PENDING_KEY)
"""
from .base import RecordStore
from .json_file import JsonFileStore
from .memory import MemoryStore

__all__ = [
    "RecordStore",
    "JsonFileStore",
    "MemoryStore",
]

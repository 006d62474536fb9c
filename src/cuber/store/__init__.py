"""Storage backends for cuber."""

from cuber.store.base import Store
from cuber.store.memory import MemoryStore
from cuber.store.sqlite import SqliteStore

__all__ = ["Store", "MemoryStore", "SqliteStore"]

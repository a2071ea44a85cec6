"""Storage backends for Learnt."""

from learnt.storage.base import JournalStorage
from learnt.storage.memory_store import InMemoryStorage
from learnt.storage.sqlite_store import SQLiteStorage

__all__ = [
    "InMemoryStorage",
    "JournalStorage",
    "SQLiteStorage",
]

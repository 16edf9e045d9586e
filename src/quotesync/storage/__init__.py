"""
quotesync storage module.

Provides the durable and session-scoped key-value stores.
"""

from quotesync.storage.store import FileStore, KeyValueStore, MemoryStore

__all__ = ["FileStore", "KeyValueStore", "MemoryStore"]

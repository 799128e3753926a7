"""Persistent key-value storage for the tracker state."""

from fit_engine.storage.store import JsonFileStore, KeyValueStore, MemoryStore

__all__ = ["JsonFileStore", "KeyValueStore", "MemoryStore"]

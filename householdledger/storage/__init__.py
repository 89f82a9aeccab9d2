"""Mini README: Persistence backends for the household ledger.

The ledger mirrors its transactions into a single string slot. ``base``
describes the capability and ``backends`` ships the in-memory and file-backed
implementations.
"""

from .backends import InMemoryKeyValueStore, JsonFileKeyValueStore
from .base import KeyValueStore

__all__ = ["InMemoryKeyValueStore", "JsonFileKeyValueStore", "KeyValueStore"]

"""Mini README: Abstract key-value persistence capability.

Structure:
    * KeyValueStore - abstract interface implemented by storage backends.

The ledger only needs a single string slot, so the interface stays as small
as the browser storage it replaces: read a key, write a key, delete a key.
Backends store opaque strings; encoding is the caller's concern.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Base interface for string key-value persistence backends."""

    backend_name: str = "generic"

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or ``None`` when absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key`` replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; deleting a missing key is not an error."""

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

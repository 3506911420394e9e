"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract key-value interface for storage.
This allows us to:
1. Keep data in local JSON files today
2. Use in-memory storage for testing
3. Swap in another backend later without touching the ledger

The interface is intentionally tiny: the dashboard stores three
independent JSON documents and always reads or writes one whole document.
"""

import copy
from abc import ABC, abstractmethod
from typing import Any, Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for key-value document storage.

    Values are JSON-compatible Python objects (lists, dicts, strings,
    numbers). Any implementation must provide these methods.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[Any]:
        """
        Read the document stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored value, or None if nothing is stored under the key

        Raises:
            SerializationError: If the stored document cannot be decoded
            StorageError: If the storage medium fails
        """
        pass

    @abstractmethod
    def write(self, key: str, value: Any) -> None:
        """
        Store a document under a key, replacing any prior value.

        Raises:
            SerializationError: If the value cannot be encoded
            StorageError: If the storage medium fails
        """
        pass


class InMemoryStorage(KeyValueStorageInterface):
    """
    Dictionary-backed storage.

    Used in tests and when no data directory is writable. Values are
    deep-copied in and out so callers cannot alias stored documents.
    """

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def read(self, key: str) -> Optional[Any]:
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    def write(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def keys(self) -> list[str]:
        return list(self._data)


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class SerializationError(StorageError):
    """A value could not be encoded or a stored document could not be decoded."""
    pass

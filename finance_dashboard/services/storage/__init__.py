"""
Storage Services Package

Provides the abstract key-value interface, its implementations, and the
typed collections the dashboard persists.
Currently implements local JSON files as the backend, but designed to be swappable.
"""

from finance_dashboard.services.storage.interface import (
    InMemoryStorage,
    KeyValueStorageInterface,
    SerializationError,
    StorageError,
)
from finance_dashboard.services.storage.json_file import JsonFileStorage
from finance_dashboard.services.storage.store import PersistentCollection

__all__ = [
    # Interfaces
    "KeyValueStorageInterface",
    # Exceptions
    "SerializationError",
    "StorageError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
    # Typed collections
    "PersistentCollection",
]

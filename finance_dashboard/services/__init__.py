"""Services package."""

from finance_dashboard.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
    PersistentCollection,
    SerializationError,
    StorageError,
)

__all__ = [
    # Storage services
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorageInterface",
    "PersistentCollection",
    "SerializationError",
    "StorageError",
]

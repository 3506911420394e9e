"""
Persistent Collections

A PersistentCollection binds one storage key to a list of one model type.

Contract:
- load(): returns the stored list; if nothing is stored yet, the default
  is used AND persisted
- save(items): serializes the full list and overwrites the prior value

Failures never propagate. A failed load falls back to the default, a
failed save is logged and reported via the return value, and in both
cases the caller's in-memory list stays authoritative for the session.
No retries.
"""

from typing import Generic, Optional, Sequence, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from finance_dashboard.activity import ActivityLogger
from finance_dashboard.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
)

T = TypeVar("T", bound=BaseModel)


class PersistentCollection(Generic[T]):
    """A list of models stored as one JSON document under one key."""

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        key: str,
        item_type: type[T],
        default: Sequence[T] = (),
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._storage = storage
        self._key = key
        self._default = tuple(default)
        self._adapter = TypeAdapter(list[item_type])
        self._activity = activity_logger or ActivityLogger()

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[T]:
        """Load the stored list, seeding the default on first use."""
        try:
            raw = self._storage.read(self._key)
        except StorageError as e:
            self._activity.log_storage_load_failed(self._key, str(e))
            return list(self._default)

        if raw is None:
            items = list(self._default)
            self.save(items)
            self._activity.log_storage_default_seeded(self._key, len(items))
            return items

        try:
            return self._adapter.validate_python(raw)
        except ValidationError as e:
            self._activity.log_storage_load_failed(
                self._key,
                f"Stored document does not match schema: {e.error_count()} errors",
            )
            return list(self._default)

    def save(self, items: Sequence[T]) -> bool:
        """
        Persist the full list.

        Returns True if the write succeeded. Errors are logged, not raised.
        """
        try:
            payload = self._adapter.dump_python(list(items), mode="json")
            self._storage.write(self._key, payload)
            return True
        except Exception as e:
            self._activity.log_storage_save_failed(self._key, f"{type(e).__name__}: {e}")
            return False

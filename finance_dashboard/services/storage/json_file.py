"""
JSON File Storage Implementation

DESIGN DECISION: Local JSON files are the storage backend because:
1. The dashboard serves one user on one machine
2. No database setup required
3. The user can open and read their data directly
4. Each key maps to exactly one file, like browser local storage

TRADEOFFS:
- Keys are written independently (no cross-key transactions)
- The whole document is rewritten on every save (fine for personal use)

Writes go to a temporary file first and are moved into place, so a
crash mid-write leaves the previous document intact.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from finance_dashboard.config import get_settings
from finance_dashboard.services.storage.interface import (
    KeyValueStorageInterface,
    SerializationError,
    StorageError,
)


class JsonFileStorage(KeyValueStorageInterface):
    """
    Directory-backed key-value storage.

    Each key is stored as <data_dir>/<key>.json.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self._data_dir = Path(data_dir) if data_dir else get_settings().storage.data_dir

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._data_dir / f"{key}.json"

    def read(self, key: str) -> Optional[Any]:
        """Read and decode the document for a key."""
        path = self._path_for(key)
        if not path.exists():
            return None

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read '{key}': {e}") from e

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise SerializationError(f"Stored value for '{key}' is not valid JSON: {e}") from e

    def write(self, key: str, value: Any) -> None:
        """Encode and atomically replace the document for a key."""
        path = self._path_for(key)

        try:
            payload = json.dumps(value, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Value for '{key}' is not JSON-serializable: {e}") from e

        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._data_dir,
                prefix=f".{key}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write '{key}': {e}") from e

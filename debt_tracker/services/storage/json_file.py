"""
JSON File Storage Implementation

Each key is stored as <data_dir>/<key>.json. The file holds exactly the
text handed to set_item; this backend does not parse it.

TRADEOFFS:
- One file per key, rewritten in full on every save (fine for a personal list)
- No locking: a single process is assumed to own the data directory

Writes go to a temporary file first and are moved into place with
os.replace, so a crash mid-write leaves the previous file intact.
"""

import os
from pathlib import Path
from typing import Optional, Union

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from debt_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageReadError,
    StorageWriteError,
)


class JsonFileKeyValueStorage(KeyValueStorageInterface):
    """File-per-key storage under a data directory."""

    def __init__(self, data_dir: Union[str, Path]):
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """File that backs a key."""
        return self._data_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read {path}: {e}")

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write_atomic(self, path: Path, value: str) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        os.replace(tmp, path)

    def set_item(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self._write_atomic(path, value)
        except OSError as e:
            raise StorageWriteError(f"Failed to write {path}: {e}")

    def remove_item(self, key: str) -> None:
        try:
            self.path_for(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageWriteError(f"Failed to remove {key}: {e}")

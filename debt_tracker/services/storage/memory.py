"""In-memory key-value storage, used by tests and throwaway sessions."""

from typing import Optional

from debt_tracker.services.storage.interface import KeyValueStorageInterface


class InMemoryKeyValueStorage(KeyValueStorageInterface):
    """Dictionary-backed storage. Nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)

"""
Abstract Key-Value Storage Interface

DESIGN DECISION: The debt list lives under a single key as one serialized
blob, like browser local storage. Backends only have to move text in and
out; they know nothing about debts.

This allows us to:
1. Use in-memory storage for tests
2. Persist to a JSON file on disk
3. Put a remote backend behind the same three methods later
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for string key-value storage.

    Any storage implementation (memory, file, remote) must implement
    these methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the text stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored text, or None if nothing is stored under the key

        Raises:
            StorageReadError: If the backend exists but cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store text under a key, replacing any previous value.

        Args:
            key: Storage key
            value: Text to store

        Raises:
            StorageWriteError: If the write fails
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Remove a key. Removing a missing key is not an error.

        Args:
            key: Storage key
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Stored data exists but could not be read."""
    pass


class StorageWriteError(StorageError):
    """Data could not be written to storage."""
    pass

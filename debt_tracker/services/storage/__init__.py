"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
The debt list is stored as one JSON blob under a single key.
"""

from debt_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from debt_tracker.services.storage.json_file import JsonFileKeyValueStorage
from debt_tracker.services.storage.memory import InMemoryKeyValueStorage

__all__ = [
    # Interfaces
    "KeyValueStorageInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
]

"""
Storage Services Package

Provides the key-value storage interface, its file and in-memory
implementations, and the gateway that encodes planner collections.
"""

from cosplay_planner.services.storage.interface import (
    DecodeError,
    KeyValueStorageInterface,
    StorageError,
    StorageUnavailableError,
)
from cosplay_planner.services.storage.file_store import FileKeyValueStorage
from cosplay_planner.services.storage.memory import InMemoryKeyValueStorage
from cosplay_planner.services.storage.gateway import (
    PlannerPersistence,
    decode_notifications,
    decode_projects,
    encode_notifications,
    encode_projects,
)

__all__ = [
    # Interfaces
    "KeyValueStorageInterface",
    # Exceptions
    "DecodeError",
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "FileKeyValueStorage",
    "InMemoryKeyValueStorage",
    # Gateway
    "PlannerPersistence",
    "decode_notifications",
    "decode_projects",
    "encode_notifications",
    "encode_projects",
]

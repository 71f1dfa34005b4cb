"""
Abstract Storage Interface

DESIGN DECISION: The planner persists three blobs in a key-value store
(active projects, archived projects, notifications). We define an
abstract interface for that store. This allows us to:
1. Keep a file-backed store for real use
2. Use in-memory storage for testing
3. Keep encoding decoupled from where the bytes end up

The interface is intentionally tiny - read a key, write a key.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for key-value blob storage.

    Any storage implementation (files, in-memory, ...)
    must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """
        Read the blob stored under a key.

        Args:
            key: Collection key (e.g., 'savedProjects')

        Returns:
            The stored bytes, or None if nothing was stored yet

        Raises:
            StorageUnavailableError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """
        Replace the blob stored under a key.

        Args:
            key: Collection key
            value: Encoded collection

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if something was removed
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List the keys currently stored."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageUnavailableError(StorageError):
    """The storage backend could not be reached or written."""
    pass


class DecodeError(StorageError):
    """A stored blob could not be decoded into records."""
    pass

"""Base cache interface."""
from abc import ABC, abstractmethod
from typing import Optional


class BaseCache(ABC):
    """Small key-value cache used as an existence check."""

    @abstractmethod
    def add(self, key: str, value: str) -> bool:
        """Store a value only if the key is absent.

        Args:
            key: Cache key
            value: Value to cache

        Returns:
            bool: True if the value was stored, False if the key already existed
        """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get a value from the cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check if a key exists in the cache.

        Args:
            key: Cache key

        Returns:
            bool: True if key exists
        """

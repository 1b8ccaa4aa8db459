"""Existence cache."""

from .base import BaseCache
from .memory import MemoryCache
from .redis import RedisCache

__all__ = ["BaseCache", "MemoryCache", "RedisCache"]

"""Redis cache implementation."""
from typing import Optional

import redis
from redis.exceptions import RedisError

from ..exceptions import CacheError
from .base import BaseCache


class RedisCache(BaseCache):
    """Redis cache implementation."""

    def __init__(
        self,
        client: redis.Redis,
        prefix: str = "meme_creator",
        namespace: Optional[str] = None
    ) -> None:
        """Initialize Redis cache.

        Args:
            client: Redis client
            prefix: Key prefix
            namespace: Optional namespace
        """
        self.client = client
        self.prefix = prefix
        self.namespace = namespace

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisCache":
        """Create a cache connected to ``url``."""
        return cls(redis.Redis.from_url(url, decode_responses=True), **kwargs)

    def _make_key(self, key: str) -> str:
        """Create a prefixed key.

        Args:
            key: Original key

        Returns:
            str: Prefixed key
        """
        parts = [self.prefix]
        if self.namespace:
            parts.append(self.namespace)
        parts.append(key)
        return ":".join(parts)

    def add(self, key: str, value: str) -> bool:
        try:
            return bool(self.client.set(self._make_key(key), value, nx=True))
        except RedisError as e:
            raise CacheError(f"adding {key} failed", original_error=e) from e

    def get(self, key: str) -> Optional[str]:
        try:
            return self.client.get(self._make_key(key))
        except RedisError as e:
            raise CacheError(f"getting {key} failed", original_error=e) from e

    def exists(self, key: str) -> bool:
        try:
            return bool(self.client.exists(self._make_key(key)))
        except RedisError as e:
            raise CacheError(f"checking {key} failed", original_error=e) from e

    def close(self) -> None:
        """Close Redis connection."""
        self.client.close()

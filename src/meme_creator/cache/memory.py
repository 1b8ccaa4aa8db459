"""In-process cache for when Redis is not configured."""

import threading
from typing import Dict, Optional

from ..utils.logging import get_logger
from .base import BaseCache

logger = get_logger(__name__)


class MemoryCache(BaseCache):
    """Dictionary-backed cache. Contents are lost on restart."""

    def __init__(self) -> None:
        self.cache: Dict[str, str] = {}
        self._lock = threading.Lock()
        logger.warning("using in-memory cache (no persistence)")

    def add(self, key: str, value: str) -> bool:
        with self._lock:
            if key in self.cache:
                return False
            self.cache[key] = value
            return True

    def get(self, key: str) -> Optional[str]:
        return self.cache.get(key)

    def exists(self, key: str) -> bool:
        return key in self.cache

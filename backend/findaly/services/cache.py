"""Time-based caches for computed link bundles"""

import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple, Type, TypeVar

import redis
from pydantic import BaseModel, ValidationError

from ..config import settings
from ..utils.logging import get_logger
from ..utils.metrics import increment_cache_hit, increment_cache_miss, increment_cache_error

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class TTLCache(ABC):
    """
    Key/value cache where every entry expires after a fixed window

    Values are pydantic models stored as JSON. Entries are never
    invalidated on catalog writes; staleness is bounded by the TTL.
    """

    def __init__(self, ttl: int, prefix: str = "links"):
        self.ttl = ttl
        self.prefix = prefix

    def make_key(self, namespace: str, key: str) -> str:
        return f"{self.prefix}:{namespace}:{key}"

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored payload, or None if missing or expired"""

    @abstractmethod
    def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass

    @abstractmethod
    def clear(self, namespace: Optional[str] = None) -> int:
        """Drop every entry (or every entry of one namespace), returning the count"""

    def get_or_compute(
        self, namespace: str, key: str, compute: Callable[[], T], model: Type[T]
    ) -> T:
        """
        Return the cached value for (namespace, key), computing it on a miss

        Args:
            namespace: Logical cache (e.g. "tool-internal-links")
            key: Identity input of the computation
            compute: Zero-argument function producing the value
            model: Pydantic model used to rebuild cached payloads
        """

        cache_key = self.make_key(namespace, key)
        payload = self.get(cache_key)

        if payload is not None:
            try:
                value = model.model_validate_json(payload)
                increment_cache_hit(namespace)
                return value
            except ValidationError:
                logger.warning("Discarding unreadable cache entry", key=cache_key)
                self.delete(cache_key)

        increment_cache_miss(namespace)
        value = compute()
        self.set(cache_key, value.model_dump_json())
        return value


class MemoryTTLCache(TTLCache):
    """Process-local cache; the clock is injectable so expiry can be tested"""

    def __init__(
        self,
        ttl: int,
        prefix: str = "links",
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(ttl, prefix)
        self.clock = clock
        self._entries: Dict[str, Tuple[float, str]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            expires_at, payload = entry
            if self.clock() >= expires_at:
                del self._entries[key]
                return None

            return payload

    def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        ttl = self.ttl if ttl is None else ttl
        if ttl <= 0:
            return

        with self._lock:
            self._entries[key] = (self.clock() + ttl, value)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self, namespace: Optional[str] = None) -> int:
        with self._lock:
            if namespace is None:
                count = len(self._entries)
                self._entries.clear()
                return count

            marker = self.make_key(namespace, "")
            doomed = [k for k in self._entries if k.startswith(marker)]
            for k in doomed:
                del self._entries[k]
            return len(doomed)


class RedisTTLCache(TTLCache):
    """
    Redis-backed cache shared by every worker

    Redis errors are logged and treated as misses so link assembly keeps
    working while the cache is down.
    """

    def __init__(self, redis_client: Optional[redis.Redis] = None, ttl: Optional[int] = None, prefix: str = "links"):
        super().__init__(ttl if ttl is not None else settings.LINK_CACHE_TTL, prefix)
        self.redis_client = redis_client or redis.Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
            password=settings.REDIS_PASSWORD,
            decode_responses=True
        )

    def _namespace_of(self, key: str) -> str:
        parts = key.split(":", 2)
        return parts[1] if len(parts) > 1 else key

    def get(self, key: str) -> Optional[str]:
        try:
            return self.redis_client.get(key)
        except redis.RedisError as e:
            logger.error("Error reading link cache", key=key, error=str(e))
            increment_cache_error(self._namespace_of(key))
            return None

    def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        ttl = self.ttl if ttl is None else ttl
        if ttl <= 0:
            return

        try:
            self.redis_client.setex(key, ttl, value)
        except redis.RedisError as e:
            logger.error("Error writing link cache", key=key, error=str(e))
            increment_cache_error(self._namespace_of(key))

    def delete(self, key: str) -> None:
        try:
            self.redis_client.delete(key)
        except redis.RedisError as e:
            logger.error("Error deleting link cache entry", key=key, error=str(e))

    def clear(self, namespace: Optional[str] = None) -> int:
        pattern = f"{self.prefix}:{namespace}:*" if namespace else f"{self.prefix}:*"
        keys = list(self.redis_client.scan_iter(match=pattern))
        if keys:
            self.redis_client.delete(*keys)
        logger.info("Cleared link cache", pattern=pattern, count=len(keys))
        return len(keys)

    def health_check(self) -> bool:
        try:
            return bool(self.redis_client.ping())
        except redis.RedisError:
            return False

"""
Key-value stores backing the SUDS cache.
"""

import copy
import json
import time
from typing import Any, Dict, Optional, Protocol, Tuple

import redis.asyncio as redis

from shared.logging import get_logger


class KeyValueStore(Protocol):
    """Storage medium for cached SUDS payloads."""

    async def get(self, key: str) -> Optional[Any]:
        ...

    async def set(self, key: str, value: Any) -> bool:
        ...

    async def remove(self, key: str) -> bool:
        ...

    async def aclose(self) -> None:
        ...


class MemoryStore:
    """In-process store with optional TTL.

    Values are deep-copied on the way in and out, so callers never share a
    dict with the store.
    """

    def __init__(self, ttl_seconds: Optional[float] = None):
        self.ttl_seconds = ttl_seconds
        self.logger = get_logger("suds.cache.memory")
        self._store: Dict[str, Tuple[Any, float]] = {}

    async def get(self, key: str) -> Optional[Any]:
        entry = self._store.get(key)
        if entry is None:
            return None

        value, expiry = entry
        if time.monotonic() > expiry:
            del self._store[key]
            self.logger.debug("Cache entry expired", key=key)
            return None

        return copy.deepcopy(value)

    async def set(self, key: str, value: Any) -> bool:
        expiry = time.monotonic() + self.ttl_seconds if self.ttl_seconds else float("inf")
        self._store[key] = (copy.deepcopy(value), expiry)
        return True

    async def remove(self, key: str) -> bool:
        return self._store.pop(key, None) is not None

    async def clear(self, prefix: str = "") -> int:
        keys = [key for key in self._store if key.startswith(prefix)]
        for key in keys:
            del self._store[key]
        return len(keys)

    def keys(self) -> list:
        return list(self._store.keys())

    async def aclose(self) -> None:
        self._store.clear()


class RedisStore:
    """Redis-backed store; payloads are stored as JSON.

    Redis failures are logged and degrade to a cache miss, never to an error
    for the caller.
    """

    def __init__(self, redis_url: str, ttl_seconds: Optional[int] = None, *, client: Optional[redis.Redis] = None):
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.logger = get_logger("suds.cache.redis")
        self._redis: Optional[redis.Redis] = client

    async def _get_redis(self) -> redis.Redis:
        """Get Redis connection."""
        if self._redis is None:
            self._redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
        return self._redis

    async def get(self, key: str) -> Optional[Any]:
        try:
            redis_client = await self._get_redis()
            cached_data = await redis_client.get(key)
            if not cached_data:
                return None
            if isinstance(cached_data, bytes):
                cached_data = cached_data.decode("utf-8")
            return json.loads(cached_data)
        except json.JSONDecodeError:
            self.logger.warning("Failed to deserialize cached payload", key=key)
            return None
        except Exception as e:
            self.logger.error("Cache get error", key=key, error=str(e))
            return None

    async def set(self, key: str, value: Any) -> bool:
        try:
            redis_client = await self._get_redis()
            payload = json.dumps(value)
            if self.ttl_seconds:
                await redis_client.setex(key, self.ttl_seconds, payload)
            else:
                await redis_client.set(key, payload)
            return True
        except Exception as e:
            self.logger.error("Cache set error", key=key, error=str(e))
            return False

    async def remove(self, key: str) -> bool:
        try:
            redis_client = await self._get_redis()
            return bool(await redis_client.delete(key))
        except Exception as e:
            self.logger.error("Cache remove error", key=key, error=str(e))
            return False

    async def clear(self, prefix: str = "") -> int:
        try:
            redis_client = await self._get_redis()
            keys = await redis_client.keys(f"{prefix}*")
            if keys:
                await redis_client.delete(*keys)
            return len(keys)
        except Exception as e:
            self.logger.error("Cache clear error", prefix=prefix, error=str(e))
            return 0

    async def aclose(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None

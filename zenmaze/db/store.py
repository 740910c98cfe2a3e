"""Key-value storage for personal bests and career totals."""

import logging
from typing import Optional, Protocol

import redis.asyncio as redis

from zenmaze.config import get_settings
from zenmaze.db.redis import close_redis, get_redis

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal string key-value store."""

    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...

    async def set_if_lower(self, key: str, value: int) -> bool: ...

    async def incr(self, key: str, amount: int = 1) -> int: ...


class MemoryStore:
    """Process-local store. Contents are lost on restart."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def set_if_lower(self, key: str, value: int) -> bool:
        """Store value when the key is unset or holds a larger integer."""
        current = self._data.get(key)
        if current is not None and int(current) <= value:
            return False
        self._data[key] = str(value)
        return True

    async def incr(self, key: str, amount: int = 1) -> int:
        total = int(self._data.get(key, "0")) + amount
        self._data[key] = str(total)
        return total


# Compare-and-set in one round trip so concurrent clears cannot
# overwrite a faster time with a slower one
SET_IF_LOWER_SCRIPT = """
local current = redis.call('GET', KEYS[1])
if current and tonumber(current) <= tonumber(ARGV[1]) then
    return 0
end
redis.call('SET', KEYS[1], ARGV[1])
return 1
"""


class RedisStore:
    """Store backed by plain Redis string keys."""

    def __init__(self, client: Optional[redis.Redis] = None):
        self._redis = client

    async def _get_redis(self) -> redis.Redis:
        """Get Redis client."""
        if self._redis is None:
            self._redis = await get_redis()
        return self._redis

    async def get(self, key: str) -> Optional[str]:
        r = await self._get_redis()
        return await r.get(key)

    async def set(self, key: str, value: str) -> None:
        r = await self._get_redis()
        await r.set(key, value)

    async def set_if_lower(self, key: str, value: int) -> bool:
        r = await self._get_redis()
        return bool(await r.eval(SET_IF_LOWER_SCRIPT, 1, key, value))

    async def incr(self, key: str, amount: int = 1) -> int:
        r = await self._get_redis()
        return await r.incrby(key, amount)


# Singleton instance
_store: Optional[KeyValueStore] = None


def get_store() -> KeyValueStore:
    """Get the configured store (singleton)."""
    global _store
    if _store is None:
        backend = get_settings().store_backend
        _store = RedisStore() if backend == "redis" else MemoryStore()
        logger.info(f"Using {backend} store for records")
    return _store


async def close_store() -> None:
    """Release the store and any Redis connection behind it."""
    global _store
    if isinstance(_store, RedisStore):
        await close_redis()
    _store = None

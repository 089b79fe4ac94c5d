"""
Key-Value Store Module

Provides the singleton store behind carts and cart notifications:
- Upstash Redis (async REST client) when credentials are configured
- In-process MemoryStore otherwise (local development, tests)

Both expose the same async surface: get / set(ex=, px=) / delete.
"""

import time
from typing import Callable, Dict, Optional, Tuple, Union

from upstash_redis.asyncio import Redis as AsyncRedis

from techmart import config
from techmart.logging import get_logger

logger = get_logger(__name__)


class MemoryStore:
    """
    Dict-backed store mirroring the subset of the Redis API the cart uses.

    Expiry is evaluated lazily on read against an injectable monotonic clock,
    so tests can advance time without sleeping.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}

    async def get(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    async def set(
        self,
        key: str,
        value: str,
        ex: Optional[int] = None,
        px: Optional[int] = None,
    ) -> bool:
        expires_at = None
        if px is not None:
            expires_at = self._clock() + px / 1000
        elif ex is not None:
            expires_at = self._clock() + ex
        self._data[key] = (value, expires_at)
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self._data.pop(key, None) is not None:
                removed += 1
        return removed


Store = Union[AsyncRedis, MemoryStore]

# Singleton instance
_store: Optional[Store] = None


def get_store() -> Store:
    """
    Get the cart key-value store (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN

    Falls back to an in-process MemoryStore when they are not set. Carts in
    the memory store do not survive a process restart.
    """
    global _store

    if _store is None:
        if config.redis_configured():
            _store = AsyncRedis(
                url=config.UPSTASH_REDIS_REST_URL,
                token=config.UPSTASH_REDIS_REST_TOKEN,
            )
        else:
            logger.warning("Upstash Redis is not configured; carts are kept in process memory")
            _store = MemoryStore()

    return _store


def reset_store(store: Optional[Store] = None) -> None:
    """Replace the singleton store (used by tests and app startup)."""
    global _store
    _store = store


# Key prefixes for organization
class RedisKeys:
    """Key prefixes for different data types."""

    # Cart storage
    CART = "cart:"  # cart:{session}

    # Transient status message for the cart-notification region
    NOTIFICATION = "notify:"  # notify:{session}

    @staticmethod
    def cart_key(session_id: str) -> str:
        return f"{RedisKeys.CART}{session_id}"

    @staticmethod
    def notification_key(session_id: str) -> str:
        return f"{RedisKeys.NOTIFICATION}{session_id}"


class TTL:
    """Time-to-live constants."""

    CART = config.CART_TTL_SECONDS  # seconds, 0 = no expiry
    NOTIFICATION_MS = config.NOTIFICATION_CLEAR_MS

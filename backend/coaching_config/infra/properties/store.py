"""Key-value property store (role list, cached vocabularies)."""
import logging
from typing import Optional, Protocol

import redis.asyncio as redis

logger = logging.getLogger(__name__)


class PropertyStore(Protocol):
    """String key-value store protocol."""

    async def get(self, key: str) -> Optional[str]:
        """Get a property value."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Set a property value."""
        ...

    async def delete(self, key: str) -> None:
        """Remove a property."""
        ...


class InMemoryPropertyStore:
    """Process-local properties (tests and local development)."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    async def delete(self, key: str) -> None:
        self._values.pop(key, None)


class RedisPropertyStore:
    """Properties kept in one Redis hash."""

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        namespace: str = "coaching_config:properties",
        client: Optional[redis.Redis] = None,
    ):
        self.redis_url = redis_url
        self.namespace = namespace
        self._redis: Optional[redis.Redis] = client

    def _client(self) -> redis.Redis:
        if self._redis is None:
            self._redis = redis.from_url(self.redis_url, decode_responses=True)
        return self._redis

    async def get(self, key: str) -> Optional[str]:
        return await self._client().hget(self.namespace, key)

    async def set(self, key: str, value: str) -> None:
        await self._client().hset(self.namespace, key, value)
        logger.debug("Property %s saved (%d bytes)", key, len(value))

    async def delete(self, key: str) -> None:
        await self._client().hdel(self.namespace, key)

    async def close(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None

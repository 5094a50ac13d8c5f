"""Redis cache backend adapter."""

import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ....core.exceptions import CacheError

logger = logging.getLogger(__name__)


class RedisAdapter:
    """Redis cache backend adapter.
    
    Every Redis failure is re-raised as ``CacheError``.
    """
    
    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        default_ttl: Optional[int] = None,
        client: Optional[redis.Redis] = None,
    ):
        self.url = url
        self.default_ttl = default_ttl
        self.redis_client: Optional[redis.Redis] = client
        self._connected = client is not None
    
    async def connect(self) -> None:
        """Connect to Redis."""
        if self._connected:
            return
        
        try:
            self.redis_client = redis.Redis.from_url(self.url)
            await self.redis_client.ping()
            self._connected = True
            logger.info(f"Connected to Redis cache at {self.url}")
        except RedisError as e:
            self.redis_client = None
            raise CacheError(f"Failed to connect to Redis: {e}")
    
    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self.redis_client is not None:
            try:
                await self.redis_client.aclose()
            except RedisError as e:
                logger.error(f"Error closing Redis connection: {e}")
            finally:
                self.redis_client = None
                self._connected = False
    
    async def get(self, key: str) -> Optional[bytes]:
        await self._ensure_connected()
        
        try:
            return await self.redis_client.get(key)
        except RedisError as e:
            raise CacheError(f"Redis get error for key {key}: {e}")
    
    async def set(self, key: str, value: bytes, ttl: Optional[int] = None) -> None:
        await self._ensure_connected()
        
        effective_ttl = ttl or self.default_ttl
        try:
            await self.redis_client.set(
                key,
                value,
                ex=effective_ttl if effective_ttl and effective_ttl > 0 else None
            )
        except RedisError as e:
            raise CacheError(f"Redis set error for key {key}: {e}")
    
    async def delete(self, key: str) -> bool:
        await self._ensure_connected()
        
        try:
            return await self.redis_client.delete(key) > 0
        except RedisError as e:
            raise CacheError(f"Redis delete error for key {key}: {e}")
    
    async def clear(self) -> None:
        await self._ensure_connected()
        
        try:
            await self.redis_client.flushdb()
        except RedisError as e:
            raise CacheError(f"Redis clear error: {e}")
    
    async def health_check(self) -> bool:
        if not self._connected:
            return False
        
        try:
            await self.redis_client.ping()
            return True
        except RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False
    
    async def _ensure_connected(self) -> None:
        if not self._connected:
            await self.connect()

"""Tests for cache backend adapters."""

import pytest
from unittest.mock import AsyncMock
from redis.exceptions import ConnectionError as RedisConnectionError

from neo_permissions.core.exceptions import CacheError
from neo_permissions.features.cache import MemoryAdapter, RedisAdapter
from neo_permissions.features.cache.adapters import memory_adapter


class TestMemoryAdapter:
    
    @pytest.mark.asyncio
    async def test_set_get_delete(self):
        cache = MemoryAdapter()
        await cache.set("k", b"v")
        
        assert await cache.get("k") == b"v"
        assert await cache.delete("k") is True
        assert await cache.delete("k") is False
        assert await cache.get("k") is None
    
    @pytest.mark.asyncio
    async def test_entries_expire_after_ttl(self, monkeypatch):
        now = [1000.0]
        monkeypatch.setattr(memory_adapter.time, "time", lambda: now[0])
        cache = MemoryAdapter()
        await cache.set("k", b"v", ttl=30)
        
        now[0] += 29
        assert await cache.get("k") == b"v"
        now[0] += 2
        assert await cache.get("k") is None
    
    @pytest.mark.asyncio
    async def test_least_recently_used_entry_is_evicted(self):
        cache = MemoryAdapter(max_size=2)
        await cache.set("a", b"1")
        await cache.set("b", b"2")
        await cache.get("a")
        await cache.set("c", b"3")
        
        assert await cache.get("b") is None
        assert await cache.get("a") == b"1"
        assert await cache.size() == 2
    
    @pytest.mark.asyncio
    async def test_info_reports_hit_rate(self):
        cache = MemoryAdapter()
        await cache.set("a", b"1")
        await cache.get("a")
        await cache.get("missing")
        
        info = await cache.info()
        
        assert info["hits"] == 1
        assert info["misses"] == 1
        assert info["hit_rate"] == 0.5


class TestRedisAdapter:
    
    @pytest.fixture
    def redis_client(self):
        client = AsyncMock()
        client.get = AsyncMock(return_value=b"1")
        client.set = AsyncMock()
        client.delete = AsyncMock(return_value=1)
        client.ping = AsyncMock(return_value=True)
        return client
    
    @pytest.mark.asyncio
    async def test_operations_use_client_with_ttl(self, redis_client):
        cache = RedisAdapter(client=redis_client, default_ttl=1800)
        
        assert await cache.get("k") == b"1"
        await cache.set("k", b"0")
        assert await cache.delete("k") is True
        
        redis_client.set.assert_awaited_once_with("k", b"0", ex=1800)
    
    @pytest.mark.asyncio
    async def test_redis_errors_become_cache_errors(self, redis_client):
        redis_client.get.side_effect = RedisConnectionError("down")
        cache = RedisAdapter(client=redis_client)
        
        with pytest.raises(CacheError):
            await cache.get("k")
    
    @pytest.mark.asyncio
    async def test_health_check(self, redis_client):
        cache = RedisAdapter(client=redis_client)
        assert await cache.health_check() is True
        
        redis_client.ping.side_effect = RedisConnectionError("down")
        assert await cache.health_check() is False

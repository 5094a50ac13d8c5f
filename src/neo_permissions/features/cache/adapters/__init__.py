"""Cache backend adapters."""

from .memory_adapter import MemoryAdapter, MemoryCacheEntry
from .redis_adapter import RedisAdapter

__all__ = ["MemoryAdapter", "MemoryCacheEntry", "RedisAdapter"]

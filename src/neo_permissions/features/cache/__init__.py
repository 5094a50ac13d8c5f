"""Cache feature: backend adapters used by the cached permission store."""

from .entities import CacheBackendAdapter
from .adapters import MemoryAdapter, RedisAdapter

__all__ = ["CacheBackendAdapter", "MemoryAdapter", "RedisAdapter"]

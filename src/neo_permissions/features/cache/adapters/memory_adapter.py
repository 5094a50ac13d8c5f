"""In-process cache backend adapter with TTL and LRU eviction."""

import asyncio
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class MemoryCacheEntry:
    """Memory cache entry with expiry metadata."""
    value: bytes
    created_at: float = field(default_factory=time.time)
    expires_at: Optional[float] = None
    
    @property
    def is_expired(self) -> bool:
        if self.expires_at is None:
            return False
        return time.time() > self.expires_at


class MemoryAdapter:
    """Memory cache backend adapter with LRU eviction and TTL support."""
    
    def __init__(self, max_size: int = 10000, default_ttl: Optional[int] = None):
        self.max_size = max_size
        self.default_ttl = default_ttl
        self._store: OrderedDict[str, MemoryCacheEntry] = OrderedDict()
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0
    
    async def connect(self) -> None:
        logger.info(f"Memory cache initialized with max_size={self.max_size}")
    
    async def disconnect(self) -> None:
        await self.clear()
    
    async def get(self, key: str) -> Optional[bytes]:
        """Get value by key, dropping it when expired."""
        async with self._lock:
            entry = self._store.get(key)
            
            if entry is None:
                self._misses += 1
                return None
            
            if entry.is_expired:
                del self._store[key]
                self._misses += 1
                return None
            
            self._store.move_to_end(key)
            self._hits += 1
            return entry.value
    
    async def set(self, key: str, value: bytes, ttl: Optional[int] = None) -> None:
        """Set key-value pair with optional TTL."""
        effective_ttl = ttl or self.default_ttl
        expires_at = time.time() + effective_ttl if effective_ttl and effective_ttl > 0 else None
        
        async with self._lock:
            self._store.pop(key, None)
            while len(self._store) >= self.max_size:
                evicted_key, _ = self._store.popitem(last=False)
                logger.debug(f"Evicted cache key {evicted_key}")
            self._store[key] = MemoryCacheEntry(value=value, expires_at=expires_at)
    
    async def delete(self, key: str) -> bool:
        """Delete key and return whether it existed."""
        async with self._lock:
            return self._store.pop(key, None) is not None
    
    async def clear(self) -> None:
        async with self._lock:
            self._store.clear()
    
    async def size(self) -> int:
        async with self._lock:
            return len(self._store)
    
    async def info(self) -> Dict[str, Any]:
        async with self._lock:
            total_requests = self._hits + self._misses
            return {
                "backend_type": "memory",
                "total_entries": len(self._store),
                "max_entries": self.max_size,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": (self._hits / total_requests) if total_requests else 0.0,
            }
    
    async def health_check(self) -> bool:
        return True

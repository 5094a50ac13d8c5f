"""Cache backend protocol used by the cached permission store."""

from abc import abstractmethod
from typing import Optional, Protocol, TypeVar, runtime_checkable

K = TypeVar('K')  # Key type
V = TypeVar('V')  # Value type


@runtime_checkable
class CacheBackendAdapter(Protocol[K, V]):
    """Protocol for cache backend implementations.
    
    Backend failures are raised as ``CacheError`` so callers can decide
    whether to fail open.
    """
    
    @abstractmethod
    async def connect(self) -> None:
        ...
    
    @abstractmethod
    async def disconnect(self) -> None:
        ...
    
    @abstractmethod
    async def get(self, key: K) -> Optional[V]:
        """Get value by key."""
        ...
    
    @abstractmethod
    async def set(self, key: K, value: V, ttl: Optional[int] = None) -> None:
        """Set key-value pair with optional TTL in seconds."""
        ...
    
    @abstractmethod
    async def delete(self, key: K) -> bool:
        """Delete key and return whether it existed."""
        ...
    
    @abstractmethod
    async def clear(self) -> None:
        ...
    
    @abstractmethod
    async def health_check(self) -> bool:
        ...

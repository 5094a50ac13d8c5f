"""Cache entities."""

from .protocols import CacheBackendAdapter

__all__ = ["CacheBackendAdapter"]

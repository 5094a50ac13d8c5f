"""Permission and dynamic permission stores."""

from .memory_permission_store import MemoryPermissionStore
from .asyncpg_permission_store import AsyncPGPermissionStore, PERMISSION_GRANTS_SCHEMA_SQL
from .memory_dynamic_permission_store import MemoryDynamicPermissionStore
from .asyncpg_dynamic_permission_store import (
    AsyncPGDynamicPermissionStore,
    DYNAMIC_PERMISSIONS_SCHEMA_SQL,
)
from .cached_permission_store import (
    CachedPermissionStore,
    PermissionCacheInvalidator,
    is_granted_cache_key,
    get_all_cache_key,
)

__all__ = [
    "MemoryPermissionStore",
    "AsyncPGPermissionStore",
    "PERMISSION_GRANTS_SCHEMA_SQL",
    "MemoryDynamicPermissionStore",
    "AsyncPGDynamicPermissionStore",
    "DYNAMIC_PERMISSIONS_SCHEMA_SQL",
    "CachedPermissionStore",
    "PermissionCacheInvalidator",
    "is_granted_cache_key",
    "get_all_cache_key",
]

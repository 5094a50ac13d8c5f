"""Read-through cache in front of a permission store.

Single lookups and per-subject aggregate lookups are cached under separate
keys. Both keys of a subject are dropped together on every change, so the
"is granted" view and the "get all" view never diverge.

Cache failures on reads fall back to the wrapped store. They never produce
a grant decision of their own.

Every invalidation bumps a generation counter. A store read that overlaps an
invalidation is returned to its caller but not written to the cache.
"""

import json
import logging
from typing import List, Optional

from ....core.exceptions import CacheError
from ...cache.entities import CacheBackendAdapter
from ..entities import (
    GrantStatus,
    PermissionChangedEvent,
    PermissionGrant,
    PermissionStore,
    ProviderKind,
)

logger = logging.getLogger(__name__)


def is_granted_cache_key(
    name: str,
    provider_kind: ProviderKind,
    provider_key: str,
    tenant_id: Optional[str]
) -> str:
    return f"Permission:IsGranted:{tenant_id or ''}:{name}:{ProviderKind.parse(provider_kind).value}:{provider_key}"


def get_all_cache_key(
    provider_kind: ProviderKind,
    provider_key: str,
    tenant_id: Optional[str]
) -> str:
    return f"Permission:GetAll:{tenant_id or ''}:{ProviderKind.parse(provider_kind).value}:{provider_key}"


class CachedPermissionStore:
    """PermissionStore decorator serving reads from a cache backend."""
    
    def __init__(
        self,
        inner: PermissionStore,
        cache: CacheBackendAdapter,
        ttl_seconds: int = 1800,
    ):
        self._inner = inner
        self._cache = cache
        self._ttl = ttl_seconds
        self._generation = 0
    
    @property
    def inner(self) -> PermissionStore:
        return self._inner
    
    async def is_granted(
        self,
        name: str,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str]
    ) -> GrantStatus:
        key = is_granted_cache_key(name, provider_kind, provider_key, tenant_id)
        
        cached = await self._cache_get(key)
        if cached is not None:
            try:
                return GrantStatus(int(cached))
            except ValueError:
                logger.warning(f"Ignoring malformed cached grant status under {key}")
        
        generation = self._generation
        status = await self._inner.is_granted(name, provider_kind, provider_key, tenant_id)
        await self._cache_set(key, str(int(status)).encode(), generation)
        return status
    
    async def get_all(
        self,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str]
    ) -> List[PermissionGrant]:
        key = get_all_cache_key(provider_kind, provider_key, tenant_id)
        
        cached = await self._cache_get(key)
        if cached is not None:
            try:
                return [PermissionGrant.from_dict(item) for item in json.loads(cached)]
            except (ValueError, KeyError, TypeError):
                logger.warning(f"Ignoring malformed cached grant list under {key}")
        
        generation = self._generation
        grants = await self._inner.get_all(provider_kind, provider_key, tenant_id)
        payload = json.dumps([grant.to_dict() for grant in grants]).encode()
        await self._cache_set(key, payload, generation)
        return grants
    
    async def save(
        self,
        name: str,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str],
        is_granted: bool
    ) -> None:
        await self._inner.save(name, provider_kind, provider_key, tenant_id, is_granted)
    
    async def delete(
        self,
        name: str,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str]
    ) -> None:
        await self._inner.delete(name, provider_kind, provider_key, tenant_id)
    
    async def invalidate(
        self,
        name: str,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str]
    ) -> None:
        """Drop the single and aggregate entries of one subject."""
        keys = (
            is_granted_cache_key(name, provider_kind, provider_key, tenant_id),
            get_all_cache_key(provider_kind, provider_key, tenant_id),
        )
        self._generation += 1
        for key in keys:
            try:
                await self._cache.delete(key)
            except CacheError as e:
                logger.error(f"Failed to invalidate permission cache key {key}: {e}")
                raise
        logger.debug(f"Invalidated permission cache for {name} {keys[1]}")
    
    async def _cache_get(self, key: str) -> Optional[bytes]:
        try:
            value = await self._cache.get(key)
        except CacheError as e:
            logger.warning(f"Permission cache read failed for {key}, using store: {e}")
            return None
        
        if value is not None:
            logger.debug(f"Permission cache hit: {key}")
        return value
    
    async def _cache_set(self, key: str, value: bytes, generation: int) -> None:
        if generation != self._generation:
            logger.debug(f"Skipping permission cache populate for {key}: invalidated during read")
            return
        try:
            await self._cache.set(key, value, self._ttl)
        except CacheError as e:
            logger.warning(f"Permission cache write failed for {key}: {e}")


class PermissionCacheInvalidator:
    """Event handler dropping cached entries touched by a grant change."""
    
    def __init__(self, store: CachedPermissionStore):
        self._store = store
    
    async def __call__(self, event: PermissionChangedEvent) -> None:
        await self._store.invalidate(
            event.name,
            event.provider_kind,
            event.provider_key,
            event.tenant_id,
        )

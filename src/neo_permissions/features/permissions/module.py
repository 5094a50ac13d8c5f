"""Composition of the permission system.

Everything is wired explicitly: the cache decorator is constructed here and
subscribed to the event bus, so no container or interception is involved.
"""

import logging
from dataclasses import dataclass
from functools import partial
from typing import Iterable, Optional

import asyncpg

from ...config.settings import CacheBackend, PermissionSettings, get_settings
from ...core.exceptions import ConfigurationError
from ...core.shared import CurrentTenant, current_tenant
from ..cache import CacheBackendAdapter, MemoryAdapter, RedisAdapter
from .entities import (
    DynamicPermissionStore,
    PERMISSION_CHANGE_EVENTS,
    PermissionDefinitionProvider,
    PermissionStore,
)
from .providers import DynamicPermissionDefinitionProvider
from .repositories import (
    AsyncPGDynamicPermissionStore,
    AsyncPGPermissionStore,
    CachedPermissionStore,
    MemoryDynamicPermissionStore,
    MemoryPermissionStore,
    PermissionCacheInvalidator,
)
from .services import (
    DynamicPermissionService,
    PermissionChecker,
    PermissionDataSeeder,
    PermissionDefinitionManager,
    PermissionEventBus,
    PermissionInitializer,
    PermissionManagementService,
    PermissionManager,
)

logger = logging.getLogger(__name__)


@dataclass
class PermissionSystem:
    """Handles to every wired permission component."""
    settings: PermissionSettings
    definition_manager: PermissionDefinitionManager
    store: PermissionStore
    dynamic_store: DynamicPermissionStore
    event_bus: PermissionEventBus
    checker: PermissionChecker
    manager: PermissionManager
    management: PermissionManagementService
    dynamic_permissions: DynamicPermissionService
    seeder: PermissionDataSeeder
    initializer: PermissionInitializer
    tenant: CurrentTenant
    cache: Optional[CacheBackendAdapter] = None
    
    async def start(self, seed: bool = True) -> None:
        """Connect the cache, build definitions and optionally seed role grants.
        
        Call before serving traffic.
        """
        if self.cache is not None:
            await self.cache.connect()
        await self.definition_manager.initialize()
        if seed:
            await self.initializer.initialize()
    
    async def stop(self) -> None:
        if self.cache is not None:
            await self.cache.disconnect()


def create_cache_adapter(settings: PermissionSettings) -> CacheBackendAdapter:
    if settings.cache_backend == CacheBackend.REDIS:
        return RedisAdapter(url=settings.redis_url, default_ttl=settings.cache_ttl_seconds)
    return MemoryAdapter(max_size=settings.cache_max_size, default_ttl=settings.cache_ttl_seconds)


def create_permission_system(
    settings: Optional[PermissionSettings] = None,
    providers: Iterable[PermissionDefinitionProvider] = (),
    store: Optional[PermissionStore] = None,
    dynamic_store: Optional[DynamicPermissionStore] = None,
    cache: Optional[CacheBackendAdapter] = None,
    tenant: Optional[CurrentTenant] = None,
) -> PermissionSystem:
    """Wire the permission system.
    
    Stores default to in-memory implementations. Dynamic permissions of the
    host scope are loaded after ``providers``; each tenant additionally sees
    its own dynamic permissions.
    """
    settings = settings or get_settings()
    tenant = tenant or current_tenant
    store = store or MemoryPermissionStore()
    dynamic_store = dynamic_store or MemoryDynamicPermissionStore()
    event_bus = PermissionEventBus()
    
    if settings.cache_enabled:
        cache = cache or create_cache_adapter(settings)
        cached_store = CachedPermissionStore(store, cache, ttl_seconds=settings.cache_ttl_seconds)
        invalidator = PermissionCacheInvalidator(cached_store)
        for event_type in PERMISSION_CHANGE_EVENTS:
            event_bus.subscribe(event_type, invalidator)
        store = cached_store
    else:
        cache = None
    
    definition_manager = PermissionDefinitionManager(
        list(providers),
        tenant_provider_factory=partial(DynamicPermissionDefinitionProvider, dynamic_store),
        tenant=tenant,
    )
    definition_manager.add_provider(DynamicPermissionDefinitionProvider(dynamic_store))
    
    manager = PermissionManager(definition_manager, store, event_bus=event_bus, tenant=tenant)
    seeder = PermissionDataSeeder(manager, definition_manager)
    
    return PermissionSystem(
        settings=settings,
        definition_manager=definition_manager,
        store=store,
        dynamic_store=dynamic_store,
        event_bus=event_bus,
        checker=PermissionChecker(definition_manager, store, tenant=tenant),
        manager=manager,
        management=PermissionManagementService(definition_manager, manager),
        dynamic_permissions=DynamicPermissionService(dynamic_store, definition_manager, tenant=tenant),
        seeder=seeder,
        initializer=PermissionInitializer(seeder, settings),
        tenant=tenant,
        cache=cache,
    )


async def create_postgres_permission_system(
    settings: Optional[PermissionSettings] = None,
    providers: Iterable[PermissionDefinitionProvider] = (),
    pool: Optional[asyncpg.Pool] = None,
    create_schema: bool = True,
) -> PermissionSystem:
    """Wire the permission system on top of asyncpg stores."""
    settings = settings or get_settings()
    if pool is None:
        if not settings.database_url:
            raise ConfigurationError("NEO_PERMISSIONS_DATABASE_URL is required for the PostgreSQL stores")
        pool = await asyncpg.create_pool(
            settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )
    
    store = AsyncPGPermissionStore(pool, schema=settings.db_schema)
    dynamic_store = AsyncPGDynamicPermissionStore(pool, schema=settings.db_schema)
    if create_schema:
        await store.create_schema()
        await dynamic_store.create_schema()
    
    logger.info(f"Permission stores bound to schema {settings.db_schema}")
    return create_permission_system(
        settings=settings,
        providers=providers,
        store=store,
        dynamic_store=dynamic_store,
    )

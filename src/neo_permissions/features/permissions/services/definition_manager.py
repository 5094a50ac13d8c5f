"""Permission definition registry.

Runs every definition provider exactly once and exposes the resulting
definitions read-only. Initialization is single-flight: concurrent first
readers wait on one lock while a single caller runs the providers.

When a tenant provider factory is configured, each tenant sees the host
definitions plus whatever the tenant's own provider adds. Tenant definitions
are layered onto a copy of the host definitions the first time that tenant
is read, so the host providers still run only once.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from ....core.shared import AMBIENT_TENANT, CurrentTenant, current_tenant
from ..entities import (
    PermissionDefinition,
    PermissionDefinitionContext,
    PermissionDefinitionProvider,
    PermissionGroupDefinition,
)

logger = logging.getLogger(__name__)

TenantProviderFactory = Callable[[str], PermissionDefinitionProvider]


class PermissionDefinitionManager:
    """Registry of permission and group definitions built from providers."""
    
    def __init__(
        self,
        providers: Optional[Iterable[PermissionDefinitionProvider]] = None,
        tenant_provider_factory: Optional[TenantProviderFactory] = None,
        tenant: Optional[CurrentTenant] = None,
    ):
        self._providers: List[PermissionDefinitionProvider] = list(providers or [])
        self._tenant_provider_factory = tenant_provider_factory
        self._tenant = tenant or current_tenant
        self._context: Optional[PermissionDefinitionContext] = None
        self._tenant_contexts: Dict[str, PermissionDefinitionContext] = {}
        self._lock = asyncio.Lock()
    
    @property
    def is_initialized(self) -> bool:
        return self._context is not None
    
    def add_provider(self, provider: PermissionDefinitionProvider) -> None:
        """Register a provider; it runs on the next initialize or refresh."""
        self._providers.append(provider)
    
    async def initialize(self) -> None:
        """Run all providers once. Later calls return immediately."""
        if self._context is not None:
            return
        
        async with self._lock:
            if self._context is not None:
                return
            self._context = await self._build()
    
    async def ensure_initialized(self, tenant_id: Any = AMBIENT_TENANT) -> PermissionDefinitionContext:
        """Return the definitions visible to ``tenant_id``, building them on first use."""
        if self._context is None:
            await self.initialize()
        
        tenant = self._tenant.resolve(tenant_id)
        if tenant is None or self._tenant_provider_factory is None:
            return self._context
        
        context = self._tenant_contexts.get(tenant)
        if context is not None:
            return context
        
        async with self._lock:
            context = self._tenant_contexts.get(tenant)
            if context is None:
                context = await self._build_tenant(tenant)
                self._tenant_contexts[tenant] = context
            return context
    
    async def refresh(self, tenant_id: Optional[str] = None) -> None:
        """Rebuild definitions and swap them in.
        
        Without ``tenant_id`` the host definitions are rebuilt and every
        tenant layer is dropped, to be rebuilt on its next read. With a
        ``tenant_id`` only that tenant's layer is rebuilt.
        
        Readers keep seeing the previous definitions until the new set is
        complete. A failing provider leaves the previous definitions in place.
        """
        async with self._lock:
            if tenant_id is None or self._tenant_provider_factory is None:
                self._context = await self._build()
                self._tenant_contexts.clear()
                return
            
            if self._context is None:
                self._context = await self._build()
            self._tenant_contexts[tenant_id] = await self._build_tenant(tenant_id)
    
    async def get_permission(self, name: str, tenant_id: Any = AMBIENT_TENANT) -> PermissionDefinition:
        context = await self.ensure_initialized(tenant_id)
        return context.get_permission(name)
    
    async def get_permission_or_none(
        self,
        name: str,
        tenant_id: Any = AMBIENT_TENANT,
    ) -> Optional[PermissionDefinition]:
        context = await self.ensure_initialized(tenant_id)
        return context.get_permission_or_none(name)
    
    async def get_group(self, name: str, tenant_id: Any = AMBIENT_TENANT) -> PermissionGroupDefinition:
        context = await self.ensure_initialized(tenant_id)
        return context.get_group(name)
    
    async def get_groups(self, tenant_id: Any = AMBIENT_TENANT) -> List[PermissionGroupDefinition]:
        context = await self.ensure_initialized(tenant_id)
        return context.groups
    
    async def get_permissions(self, tenant_id: Any = AMBIENT_TENANT) -> List[PermissionDefinition]:
        """All permissions, flattened, in registration order."""
        context = await self.ensure_initialized(tenant_id)
        return context.permissions
    
    async def _build(self) -> PermissionDefinitionContext:
        context = PermissionDefinitionContext()
        
        for provider in self._providers:
            await self._run_provider(provider, context)
        
        context.freeze()
        logger.info(
            f"Permission definitions initialized: {len(context.groups)} groups, "
            f"{len(context.permissions)} permissions from {len(self._providers)} providers"
        )
        return context
    
    async def _build_tenant(self, tenant_id: str) -> PermissionDefinitionContext:
        context = self._context.copy()
        await self._run_provider(self._tenant_provider_factory(tenant_id), context)
        context.freeze()
        logger.debug(f"Permission definitions for tenant {tenant_id}: {len(context.permissions)} permissions")
        return context
    
    @staticmethod
    async def _run_provider(
        provider: PermissionDefinitionProvider,
        context: PermissionDefinitionContext,
    ) -> None:
        result = provider.define(context)
        if inspect.isawaitable(result):
            await result

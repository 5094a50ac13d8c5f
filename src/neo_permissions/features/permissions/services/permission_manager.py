"""Grant mutation: grant, revoke, prohibit and diff-based bulk updates."""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Set, Tuple, Union

from ....core.shared import AMBIENT_TENANT, CurrentTenant, current_tenant
from ..entities import (
    GrantStatus,
    PermissionGrant,
    PermissionGranted,
    PermissionProhibited,
    PermissionRevoked,
    PermissionStore,
    ProviderKind,
    validate_permission_name,
    validate_provider_key,
)
from .definition_manager import PermissionDefinitionManager
from .event_bus import PermissionEventBus

logger = logging.getLogger(__name__)

ProviderKindLike = Union[ProviderKind, str]


@dataclass
class GrantDiff:
    """Minimal change set applied by ``set_granted_set``."""
    to_add: Set[str] = field(default_factory=set)
    to_remove: Set[str] = field(default_factory=set)
    
    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove


class PermissionManager:
    """Writes grants through to the store and publishes change events.
    
    Every name is resolved through the definition registry first, so unknown
    permissions can never be granted. Store writes complete before the event
    is published, and ``publish`` awaits every handler before returning.
    The manager performs no locking of its own; concurrent writes to the same
    key are resolved by the store.
    """
    
    def __init__(
        self,
        definition_manager: PermissionDefinitionManager,
        store: PermissionStore,
        event_bus: Optional[PermissionEventBus] = None,
        tenant: Optional[CurrentTenant] = None,
    ):
        self._definitions = definition_manager
        self._store = store
        self._event_bus = event_bus or PermissionEventBus()
        self._tenant = tenant or current_tenant
    
    @property
    def event_bus(self) -> PermissionEventBus:
        return self._event_bus
    
    @property
    def tenant(self) -> CurrentTenant:
        return self._tenant
    
    async def grant(
        self,
        name: str,
        provider_kind: ProviderKindLike,
        provider_key: str,
        tenant_id: Any = AMBIENT_TENANT,
    ) -> None:
        kind, key = self._validate_provider(provider_kind, provider_key)
        await self._ensure_defined(name, tenant_id)
        tenant = self._tenant.resolve(tenant_id)
        
        await self._store.save(name, kind, key, tenant, True)
        logger.debug(f"Granted {name} to {kind.value}:{key} (tenant={tenant})")
        await self._event_bus.publish(PermissionGranted(name, kind, key, tenant))
    
    async def prohibit(
        self,
        name: str,
        provider_kind: ProviderKindLike,
        provider_key: str,
        tenant_id: Any = AMBIENT_TENANT,
    ) -> None:
        kind, key = self._validate_provider(provider_kind, provider_key)
        await self._ensure_defined(name, tenant_id)
        tenant = self._tenant.resolve(tenant_id)
        
        await self._store.save(name, kind, key, tenant, False)
        logger.debug(f"Prohibited {name} for {kind.value}:{key} (tenant={tenant})")
        await self._event_bus.publish(PermissionProhibited(name, kind, key, tenant))
    
    async def revoke(
        self,
        name: str,
        provider_kind: ProviderKindLike,
        provider_key: str,
        tenant_id: Any = AMBIENT_TENANT,
    ) -> None:
        """Remove the grant record, returning the subject to undefined."""
        kind, key = self._validate_provider(provider_kind, provider_key)
        await self._ensure_defined(name, tenant_id)
        tenant = self._tenant.resolve(tenant_id)
        
        await self._store.delete(name, kind, key, tenant)
        logger.debug(f"Revoked {name} from {kind.value}:{key} (tenant={tenant})")
        await self._event_bus.publish(PermissionRevoked(name, kind, key, tenant))
    
    async def set(
        self,
        name: str,
        provider_kind: ProviderKindLike,
        provider_key: str,
        is_granted: bool,
        tenant_id: Any = AMBIENT_TENANT,
    ) -> None:
        """Grant when ``is_granted`` is true, prohibit otherwise."""
        if is_granted:
            await self.grant(name, provider_kind, provider_key, tenant_id=tenant_id)
        else:
            await self.prohibit(name, provider_kind, provider_key, tenant_id=tenant_id)
    
    async def get_status(
        self,
        name: str,
        provider_kind: ProviderKindLike,
        provider_key: str,
        tenant_id: Any = AMBIENT_TENANT,
    ) -> GrantStatus:
        kind, key = self._validate_provider(provider_kind, provider_key)
        await self._ensure_defined(name, tenant_id)
        return await self._store.is_granted(name, kind, key, self._tenant.resolve(tenant_id))
    
    async def get_all(
        self,
        provider_kind: ProviderKindLike,
        provider_key: str,
        tenant_id: Any = AMBIENT_TENANT,
    ) -> List[PermissionGrant]:
        kind, key = self._validate_provider(provider_kind, provider_key)
        return await self._store.get_all(kind, key, self._tenant.resolve(tenant_id))
    
    async def batch_grant(
        self,
        names: Iterable[str],
        provider_kind: ProviderKindLike,
        provider_key: str,
        tenant_id: Any = AMBIENT_TENANT,
    ) -> None:
        """Grant every name; nothing is written unless all names are defined."""
        names = list(names)
        self._validate_provider(provider_kind, provider_key)
        for name in names:
            await self._ensure_defined(name, tenant_id)
        
        tenant = self._tenant.resolve(tenant_id)
        for name in names:
            await self.grant(name, provider_kind, provider_key, tenant_id=tenant)
    
    async def batch_revoke(
        self,
        names: Iterable[str],
        provider_kind: ProviderKindLike,
        provider_key: str,
        tenant_id: Any = AMBIENT_TENANT,
    ) -> None:
        """Revoke every name; nothing is written unless all names are defined."""
        names = list(names)
        self._validate_provider(provider_kind, provider_key)
        for name in names:
            await self._ensure_defined(name, tenant_id)
        
        tenant = self._tenant.resolve(tenant_id)
        for name in names:
            await self.revoke(name, provider_kind, provider_key, tenant_id=tenant)
    
    async def set_granted_set(
        self,
        provider_kind: ProviderKindLike,
        provider_key: str,
        desired_names: Iterable[str],
        tenant_id: Any = AMBIENT_TENANT,
    ) -> GrantDiff:
        """Make the subject's granted set equal ``desired_names``.
        
        Only the difference against the currently granted set is written:
        missing names are granted and surplus names are revoked. Prohibited
        records are not part of the granted set; a desired name that is
        currently prohibited is granted.
        """
        desired = set(desired_names)
        self._validate_provider(provider_kind, provider_key)
        for name in desired:
            await self._ensure_defined(name, tenant_id)
        
        tenant = self._tenant.resolve(tenant_id)
        existing = {
            grant.name
            for grant in await self.get_all(provider_kind, provider_key, tenant_id=tenant)
            if grant.is_granted
        }
        diff = GrantDiff(to_add=desired - existing, to_remove=existing - desired)
        
        for name in sorted(diff.to_add):
            await self.grant(name, provider_kind, provider_key, tenant_id=tenant)
        for name in sorted(diff.to_remove):
            await self.revoke(name, provider_kind, provider_key, tenant_id=tenant)
        
        logger.info(
            f"Updated granted set for {ProviderKind.parse(provider_kind).value}:{provider_key} "
            f"(tenant={tenant}): +{len(diff.to_add)} -{len(diff.to_remove)}"
        )
        return diff
    
    async def _ensure_defined(self, name: str, tenant_id: Any) -> None:
        validate_permission_name(name)
        await self._definitions.get_permission(name, tenant_id=self._tenant.resolve(tenant_id))
    
    @staticmethod
    def _validate_provider(provider_kind: ProviderKindLike, provider_key: str) -> Tuple[ProviderKind, str]:
        return ProviderKind.parse(provider_kind), validate_provider_key(provider_key)

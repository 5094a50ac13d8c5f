"""Create, update and delete runtime-authored permissions."""

import logging
from typing import Any, List, Optional

from ....core.exceptions import ConflictError, DependencyError, NotFoundError
from ....core.shared import AMBIENT_TENANT, CurrentTenant, current_tenant
from ..entities import DynamicPermissionRecord, DynamicPermissionStore
from .definition_manager import PermissionDefinitionManager

logger = logging.getLogger(__name__)


class DynamicPermissionService:
    """CRUD over dynamic permission records, refreshing the registry after each change."""
    
    def __init__(
        self,
        store: DynamicPermissionStore,
        definition_manager: PermissionDefinitionManager,
        tenant: Optional[CurrentTenant] = None,
    ):
        self._store = store
        self._definitions = definition_manager
        self._tenant = tenant or current_tenant
    
    async def get_list(self, tenant_id: Any = AMBIENT_TENANT) -> List[DynamicPermissionRecord]:
        return await self._store.get_list(self._tenant.resolve(tenant_id))
    
    async def get(self, name: str, tenant_id: Any = AMBIENT_TENANT) -> DynamicPermissionRecord:
        record = await self._store.get(name, self._tenant.resolve(tenant_id))
        if record is None:
            raise NotFoundError(
                f"Dynamic permission '{name}' does not exist",
                details={"permission": name}
            )
        return record
    
    async def create(self, record: DynamicPermissionRecord) -> DynamicPermissionRecord:
        """Persist a new record; the record's own ``tenant_id`` scopes it.
        
        A tenant-scoped record becomes visible to that tenant only, on top of
        the host definitions.
        """
        if await self._store.get(record.name, record.tenant_id) is not None:
            raise ConflictError(
                f"Dynamic permission '{record.name}' already exists",
                details={"permission": record.name}
            )
        if await self._definitions.get_permission_or_none(record.name, tenant_id=record.tenant_id) is not None:
            raise ConflictError(
                f"Permission '{record.name}' is already defined",
                details={"permission": record.name}
            )
        await self._ensure_parent_exists(record)
        
        await self._store.save(record)
        await self._definitions.refresh(record.tenant_id)
        logger.info(f"Created dynamic permission {record.name} (tenant={record.tenant_id})")
        return record
    
    async def update(self, record: DynamicPermissionRecord) -> DynamicPermissionRecord:
        existing = await self.get(record.name, tenant_id=record.tenant_id)
        await self._ensure_parent_exists(record)
        await self._ensure_acyclic(record)
        
        record.id = existing.id
        await self._store.save(record)
        await self._definitions.refresh(record.tenant_id)
        logger.info(f"Updated dynamic permission {record.name} (tenant={record.tenant_id})")
        return record
    
    async def delete(self, name: str, tenant_id: Any = AMBIENT_TENANT) -> None:
        tenant = self._tenant.resolve(tenant_id)
        await self.get(name, tenant_id=tenant)
        
        dependents = [r.name for r in await self._store.get_list(tenant) if r.parent_name == name]
        if dependents:
            raise ConflictError(
                f"Dynamic permission '{name}' still has children: {', '.join(dependents)}",
                details={"permission": name, "children": dependents}
            )
        
        await self._store.delete(name, tenant)
        await self._definitions.refresh(tenant)
        logger.info(f"Deleted dynamic permission {name} (tenant={tenant})")
    
    async def _ensure_parent_exists(self, record: DynamicPermissionRecord) -> None:
        if record.parent_name is None:
            return
        if await self._definitions.get_permission_or_none(record.parent_name, tenant_id=record.tenant_id) is not None:
            return
        raise DependencyError(
            f"Parent permission '{record.parent_name}' of '{record.name}' does not exist",
            details={"permission": record.name, "parent": record.parent_name}
        )
    
    async def _ensure_acyclic(self, record: DynamicPermissionRecord) -> None:
        """Refuse a parent that is the record itself or one of its descendants."""
        if record.parent_name is None:
            return
        context = await self._definitions.ensure_initialized(record.tenant_id)
        chain = [p.name for p in context.iter_ancestry(record.parent_name)]
        if record.name in chain:
            cycle = [record.name] + list(reversed(chain[:chain.index(record.name)]))
            raise DependencyError(
                f"Parent '{record.parent_name}' of '{record.name}' would create a cycle: "
                + " -> ".join(cycle + [record.name]),
                details={"permission": record.name, "parent": record.parent_name, "cycle": cycle}
            )

"""Definition provider merging runtime-authored permissions into the registry."""

import logging
from typing import Dict, List, Optional

from ....core.exceptions import DependencyError
from ..entities import (
    DynamicPermissionRecord,
    DynamicPermissionStore,
    PermissionDefinitionContext,
)

logger = logging.getLogger(__name__)


class DynamicPermissionDefinitionProvider:
    """Adds dynamic permission records after the static providers ran.
    
    Records are grouped by ``group_name`` (missing groups are created), roots
    are added first, then children are added in passes once their parent is
    registered. Parents may be static definitions or other dynamic records.
    
    A tenant-scoped provider runs on top of the host definitions. Tenant
    records whose name the host already defines are skipped with a warning.
    """
    
    def __init__(self, store: DynamicPermissionStore, tenant_id: Optional[str] = None):
        self._store = store
        self._tenant_id = tenant_id
    
    async def define(self, context: PermissionDefinitionContext) -> None:
        records = await self._store.get_list(self._tenant_id)
        if not records:
            return
        
        by_group: Dict[str, List[DynamicPermissionRecord]] = {}
        for record in records:
            by_group.setdefault(record.group_name, []).append(record)
        
        pending = []
        for group_name, group_records in by_group.items():
            group = context.get_group_or_none(group_name)
            if group is None:
                group = context.add_group(group_name)
            
            for record in group_records:
                if self._is_shadowed(context, record):
                    continue
                if record.parent_name is None:
                    group.add_permission(
                        record.name,
                        display_name=record.display_name,
                        description=record.description,
                        is_granted_by_default=record.is_granted_by_default,
                    )
                else:
                    pending.append(record)
        
        self._add_children(context, pending)
        
        logger.info(f"Loaded {len(records)} dynamic permissions (tenant={self._tenant_id})")
    
    def _add_children(
        self,
        context: PermissionDefinitionContext,
        pending: List[DynamicPermissionRecord]
    ) -> None:
        while pending:
            remaining = []
            for record in pending:
                if self._is_shadowed(context, record):
                    continue
                parent = context.get_permission_or_none(record.parent_name)
                if parent is None:
                    remaining.append(record)
                    continue
                parent.add_child(
                    record.name,
                    display_name=record.display_name,
                    description=record.description,
                    is_granted_by_default=record.is_granted_by_default,
                )
            
            if len(remaining) == len(pending):
                unresolved = {record.name: record.parent_name for record in remaining}
                raise DependencyError(
                    "Dynamic permissions reference unknown parents: "
                    + ", ".join(f"{name} -> {parent}" for name, parent in unresolved.items()),
                    details={"unresolved": unresolved}
                )
            pending = remaining
    
    def _is_shadowed(self, context: PermissionDefinitionContext, record: DynamicPermissionRecord) -> bool:
        if self._tenant_id is None or context.get_permission_or_none(record.name) is None:
            return False
        logger.warning(
            f"Skipping dynamic permission {record.name} of tenant {self._tenant_id}: "
            f"already defined by the host"
        )
        return True

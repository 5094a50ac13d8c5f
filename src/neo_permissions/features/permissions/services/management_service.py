"""Administrative view of grants: a group tree annotated per subject."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ....core.shared import AMBIENT_TENANT
from ..entities import PermissionDefinition, PermissionGrant
from .definition_manager import PermissionDefinitionManager
from .permission_manager import GrantDiff, PermissionManager, ProviderKindLike

logger = logging.getLogger(__name__)


@dataclass
class PermissionGrantInfo:
    name: str
    display_name: str
    parent_name: Optional[str]
    is_granted_by_default: bool
    is_granted: bool
    is_prohibited: bool
    children: List["PermissionGrantInfo"] = field(default_factory=list)


@dataclass
class PermissionGroupGrantInfo:
    name: str
    display_name: str
    permissions: List[PermissionGrantInfo] = field(default_factory=list)


@dataclass(frozen=True)
class UpdatePermissionRequest:
    """Grant (``is_granted=True``) or prohibit one permission."""
    name: str
    is_granted: bool


class PermissionManagementService:
    """Builds the group/permission tree with grant state for one subject."""
    
    def __init__(
        self,
        definition_manager: PermissionDefinitionManager,
        permission_manager: PermissionManager,
    ):
        self._definitions = definition_manager
        self._permissions = permission_manager
    
    async def get_grant_tree(
        self,
        provider_kind: ProviderKindLike,
        provider_key: str,
        tenant_id: Any = AMBIENT_TENANT,
    ) -> List[PermissionGroupGrantInfo]:
        tenant = self._permissions.tenant.resolve(tenant_id)
        grants = await self._permissions.get_all(provider_kind, provider_key, tenant_id=tenant)
        grants_by_name: Dict[str, PermissionGrant] = {grant.name: grant for grant in grants}
        
        context = await self._definitions.ensure_initialized(tenant)
        definitions = {p.name: p for p in context.permissions}
        
        tree = []
        for group in context.groups:
            tree.append(
                PermissionGroupGrantInfo(
                    name=group.name,
                    display_name=group.display_name,
                    permissions=[
                        self._build_node(definitions[name], definitions, grants_by_name)
                        for name in group.permissions
                    ],
                )
            )
        return tree
    
    async def update(
        self,
        provider_kind: ProviderKindLike,
        provider_key: str,
        updates: Iterable[UpdatePermissionRequest],
        tenant_id: Any = AMBIENT_TENANT,
    ) -> None:
        for update in updates:
            await self._permissions.set(
                update.name, provider_kind, provider_key, update.is_granted, tenant_id=tenant_id
            )
    
    async def set_granted(
        self,
        provider_kind: ProviderKindLike,
        provider_key: str,
        names: Iterable[str],
        tenant_id: Any = AMBIENT_TENANT,
    ) -> GrantDiff:
        return await self._permissions.set_granted_set(
            provider_kind, provider_key, names, tenant_id=tenant_id
        )
    
    def _build_node(
        self,
        definition: PermissionDefinition,
        definitions: Dict[str, PermissionDefinition],
        grants_by_name: Dict[str, PermissionGrant],
    ) -> PermissionGrantInfo:
        grant = grants_by_name.get(definition.name)
        return PermissionGrantInfo(
            name=definition.name,
            display_name=definition.display_name,
            parent_name=definition.parent_name,
            is_granted_by_default=definition.is_granted_by_default,
            is_granted=grant is not None and grant.is_granted,
            is_prohibited=grant is not None and not grant.is_granted,
            children=[
                self._build_node(definitions[child], definitions, grants_by_name)
                for child in definition.children
            ],
        )

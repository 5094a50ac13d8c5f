"""Startup seeding of role permissions."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from ....config.settings import PermissionSettings
from ..entities import ProviderKind
from .definition_manager import PermissionDefinitionManager
from .permission_manager import PermissionManager

logger = logging.getLogger(__name__)


@dataclass
class SeedResult:
    role: str
    granted: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    
    @property
    def has_failures(self) -> bool:
        return bool(self.failed)


class PermissionDataSeeder:
    """Grants configured permissions to roles.
    
    A bad permission name is logged and skipped so one typo does not abort
    the whole seed run. Failures are reported in the returned ``SeedResult``.
    """
    
    def __init__(
        self,
        permission_manager: PermissionManager,
        definition_manager: PermissionDefinitionManager,
    ):
        self._permission_manager = permission_manager
        self._definition_manager = definition_manager
    
    async def create_roles(self, role_names: Iterable[str]) -> None:
        """Hook for creating roles; roles are owned by the identity system."""
        for role_name in role_names:
            logger.debug(f"Assuming role {role_name} exists")
    
    async def grant_role_permissions(
        self,
        role_name: str,
        permission_names: Iterable[str],
        tenant_id: Optional[str] = None,
    ) -> SeedResult:
        result = SeedResult(role=role_name)
        
        for permission_name in permission_names:
            try:
                await self._definition_manager.get_permission(permission_name, tenant_id=tenant_id)
                await self._permission_manager.grant(
                    permission_name, ProviderKind.ROLE, role_name, tenant_id=tenant_id
                )
                result.granted.append(permission_name)
            except Exception as e:
                logger.error(f"Unable to grant permission {permission_name} to role {role_name}: {e}")
                result.failed[permission_name] = str(e)
        
        return result


class PermissionInitializer:
    """Seeds the default roles and role permissions from settings."""
    
    def __init__(self, seeder: PermissionDataSeeder, settings: PermissionSettings):
        self._seeder = seeder
        self._default_roles = list(settings.default_roles)
        self._role_permissions: Mapping[str, List[str]] = dict(settings.role_permissions)
    
    async def initialize(self, tenant_id: Optional[str] = None) -> List[SeedResult]:
        await self._seeder.create_roles(self._default_roles)
        
        results = []
        for role_name, permission_names in self._role_permissions.items():
            results.append(
                await self._seeder.grant_role_permissions(role_name, permission_names, tenant_id=tenant_id)
            )
        
        logger.info(
            f"Seeded permissions for {len(results)} roles, "
            f"{sum(len(r.failed) for r in results)} failures"
        )
        return results

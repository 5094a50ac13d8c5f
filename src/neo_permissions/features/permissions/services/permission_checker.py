"""Effective permission resolution for a principal."""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from ....core.shared import AMBIENT_TENANT, CurrentTenant, current_tenant
from ..entities import (
    GrantStatus,
    PermissionStore,
    Principal,
    ProviderKind,
    validate_permission_name,
)
from .definition_manager import PermissionDefinitionManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PermissionCheckResult:
    name: str
    is_granted: bool


class PermissionChecker:
    """Answers whether a principal currently holds a permission.
    
    Resolution order, short-circuiting at the first decisive step:
    
    1. unauthenticated principals hold nothing
    2. unknown permission names raise ``PermissionNotFoundError``
    3. default-granted permissions are held without a store lookup
    4. a user-level grant decides; a user-level prohibition denies outright
    5. the first role (in role order) with a grant allows
    6. otherwise denied
    
    A role-level prohibition does not block a grant on another role; it is
    skipped like an undefined role grant.
    
    Store errors and cancellation propagate. A failed lookup is never
    reported as a boolean.
    """
    
    def __init__(
        self,
        definition_manager: PermissionDefinitionManager,
        store: PermissionStore,
        tenant: Optional[CurrentTenant] = None,
    ):
        self._definitions = definition_manager
        self._store = store
        self._tenant = tenant or current_tenant
    
    async def is_granted(
        self,
        principal: Principal,
        name: str,
        tenant_id: Any = AMBIENT_TENANT,
    ) -> bool:
        validate_permission_name(name)
        
        if principal is None or not principal.is_authenticated:
            return False
        
        tenant = self._tenant.resolve(tenant_id)
        definition = await self._definitions.get_permission(name, tenant_id=tenant)
        if definition.is_granted_by_default:
            return True
        
        if principal.id:
            user_status = await self._store.is_granted(name, ProviderKind.USER, principal.id, tenant)
            if user_status == GrantStatus.GRANTED:
                return True
            if user_status == GrantStatus.PROHIBITED:
                logger.debug(f"Permission {name} prohibited for user {principal.id} (tenant={tenant})")
                return False
        
        for role in principal.roles:
            role_status = await self._store.is_granted(name, ProviderKind.ROLE, role, tenant)
            if role_status == GrantStatus.GRANTED:
                return True
        
        return False
    
    async def is_granted_many(
        self,
        principal: Principal,
        names: Iterable[str],
        tenant_id: Any = AMBIENT_TENANT,
    ) -> List[PermissionCheckResult]:
        """Evaluate each name independently, preserving input order."""
        tenant = self._tenant.resolve(tenant_id)
        results = []
        for name in names:
            granted = await self.is_granted(principal, name, tenant_id=tenant)
            results.append(PermissionCheckResult(name=name, is_granted=granted))
        return results

"""In-memory permission store.

Keeps grants in a dict keyed by (name, provider kind, provider key, tenant),
which gives the same uniqueness the SQL store gets from its unique index.
"""

import asyncio
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from ..entities import GrantStatus, PermissionGrant, ProviderKind

GrantKey = Tuple[str, ProviderKind, str, Optional[str]]


class MemoryPermissionStore:
    """Dict-backed PermissionStore for tests and single-process deployments."""
    
    def __init__(self):
        self._grants: Dict[GrantKey, PermissionGrant] = {}
        self._lock = asyncio.Lock()
    
    async def is_granted(
        self,
        name: str,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str]
    ) -> GrantStatus:
        grant = self._grants.get((name, ProviderKind.parse(provider_kind), provider_key, tenant_id))
        if grant is None:
            return GrantStatus.UNDEFINED
        return grant.status
    
    async def get_all(
        self,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str]
    ) -> List[PermissionGrant]:
        kind = ProviderKind.parse(provider_kind)
        return [
            replace(grant) for grant in self._grants.values()
            if grant.provider_kind == kind
            and grant.provider_key == provider_key
            and grant.tenant_id == tenant_id
        ]
    
    async def save(
        self,
        name: str,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str],
        is_granted: bool
    ) -> None:
        kind = ProviderKind.parse(provider_kind)
        key = (name, kind, provider_key, tenant_id)
        async with self._lock:
            existing = self._grants.get(key)
            if existing is not None:
                self._grants[key] = replace(existing, is_granted=is_granted)
                return
            self._grants[key] = PermissionGrant(
                name=name,
                provider_kind=kind,
                provider_key=provider_key,
                is_granted=is_granted,
                tenant_id=tenant_id,
            )
    
    async def delete(
        self,
        name: str,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str]
    ) -> None:
        async with self._lock:
            self._grants.pop((name, ProviderKind.parse(provider_kind), provider_key, tenant_id), None)

"""Ambient tenant context.

The current tenant lives in context variables, so every asyncio task sees its
own value. Switching tenant is always scoped through ``CurrentTenant.change``,
which restores the previous value on exit.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Iterator, Optional


@dataclass(frozen=True)
class TenantInfo:
    """Tenant identity active for the current logical operation."""
    id: Optional[str] = None
    name: Optional[str] = None


_tenant_var: ContextVar[TenantInfo] = ContextVar("neo_permissions_tenant", default=TenantInfo())


class _AmbientTenant:
    """Marker meaning "use whatever tenant is ambient"."""
    
    def __repr__(self) -> str:
        return "AMBIENT_TENANT"


AMBIENT_TENANT: Any = _AmbientTenant()


class CurrentTenant:
    """Accessor for the tenant scoping every store read and write.
    
    A ``None`` id is the host (tenant-less) scope.
    """
    
    @property
    def id(self) -> Optional[str]:
        return _tenant_var.get().id
    
    @property
    def name(self) -> Optional[str]:
        return _tenant_var.get().name
    
    @property
    def is_available(self) -> bool:
        return self.id is not None
    
    @contextmanager
    def change(self, tenant_id: Optional[str], name: Optional[str] = None) -> Iterator[TenantInfo]:
        """Switch the ambient tenant until the block exits.
        
        Nested changes unwind in stack order, including when the block raises.
        """
        info = TenantInfo(id=tenant_id, name=name)
        token = _tenant_var.set(info)
        try:
            yield info
        finally:
            _tenant_var.reset(token)
    
    def resolve(self, tenant_id: Any = AMBIENT_TENANT) -> Optional[str]:
        """Return ``tenant_id`` when given explicitly, otherwise the ambient id."""
        if tenant_id is AMBIENT_TENANT:
            return self.id
        return tenant_id


current_tenant = CurrentTenant()

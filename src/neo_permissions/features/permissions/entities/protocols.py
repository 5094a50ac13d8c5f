"""Protocol interfaces for the permissions feature.

Defines the contracts for grant persistence, dynamic permission persistence
and definition providers, following protocol-based dependency injection.
"""

from abc import abstractmethod
from typing import Any, Awaitable, List, Optional, Protocol, Union, runtime_checkable

from .definition import PermissionDefinitionContext
from .dynamic import DynamicPermissionRecord
from .grant import GrantStatus, PermissionGrant, ProviderKind


@runtime_checkable
class PermissionStore(Protocol):
    """Durable mapping from (name, provider kind, provider key, tenant) to a grant.
    
    Implementations must enforce tenant isolation: records saved under one
    tenant id are invisible to lookups under any other tenant id.
    """
    
    @abstractmethod
    async def is_granted(
        self,
        name: str,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str]
    ) -> GrantStatus:
        """Return the stored status, UNDEFINED when no record exists."""
        ...
    
    @abstractmethod
    async def get_all(
        self,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str]
    ) -> List[PermissionGrant]:
        """Return every grant record of one subject."""
        ...
    
    @abstractmethod
    async def save(
        self,
        name: str,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str],
        is_granted: bool
    ) -> None:
        """Insert or update a grant record."""
        ...
    
    @abstractmethod
    async def delete(
        self,
        name: str,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str]
    ) -> None:
        """Remove a grant record if present."""
        ...


@runtime_checkable
class DynamicPermissionStore(Protocol):
    """Persistence for runtime-authored permission definitions."""
    
    @abstractmethod
    async def get_list(self, tenant_id: Optional[str]) -> List[DynamicPermissionRecord]:
        ...
    
    @abstractmethod
    async def get(self, name: str, tenant_id: Optional[str]) -> Optional[DynamicPermissionRecord]:
        ...
    
    @abstractmethod
    async def save(self, record: DynamicPermissionRecord) -> None:
        """Insert or update a record keyed by (name, tenant_id)."""
        ...
    
    @abstractmethod
    async def delete(self, name: str, tenant_id: Optional[str]) -> bool:
        """Delete a record, returning whether it existed."""
        ...


@runtime_checkable
class PermissionDefinitionProvider(Protocol):
    """Source of permission definitions run once at registry initialization.
    
    ``define`` may be a plain or a coroutine method.
    """
    
    @abstractmethod
    def define(self, context: PermissionDefinitionContext) -> Union[None, Awaitable[None]]:
        ...

"""Permissions feature: definitions, grant resolution and grant management."""

from .entities import (
    PermissionDefinition,
    PermissionGroupDefinition,
    PermissionDefinitionContext,
    GrantStatus,
    ProviderKind,
    PermissionGrant,
    Principal,
    DynamicPermissionRecord,
    PermissionGranted,
    PermissionRevoked,
    PermissionProhibited,
    PermissionStore,
    DynamicPermissionStore,
    PermissionDefinitionProvider,
)
from .services import (
    PermissionDefinitionManager,
    PermissionEventBus,
    PermissionChecker,
    PermissionCheckResult,
    PermissionManager,
    GrantDiff,
    PermissionManagementService,
    UpdatePermissionRequest,
    DynamicPermissionService,
    PermissionDataSeeder,
    PermissionInitializer,
)
from .repositories import (
    MemoryPermissionStore,
    AsyncPGPermissionStore,
    MemoryDynamicPermissionStore,
    AsyncPGDynamicPermissionStore,
    CachedPermissionStore,
    PermissionCacheInvalidator,
)
from .providers import DynamicPermissionDefinitionProvider, SystemPermissionDefinitionProvider
from .module import PermissionSystem, create_permission_system, create_postgres_permission_system

__all__ = [
    "PermissionDefinition",
    "PermissionGroupDefinition",
    "PermissionDefinitionContext",
    "GrantStatus",
    "ProviderKind",
    "PermissionGrant",
    "Principal",
    "DynamicPermissionRecord",
    "PermissionGranted",
    "PermissionRevoked",
    "PermissionProhibited",
    "PermissionStore",
    "DynamicPermissionStore",
    "PermissionDefinitionProvider",
    "PermissionDefinitionManager",
    "PermissionEventBus",
    "PermissionChecker",
    "PermissionCheckResult",
    "PermissionManager",
    "GrantDiff",
    "PermissionManagementService",
    "UpdatePermissionRequest",
    "DynamicPermissionService",
    "PermissionDataSeeder",
    "PermissionInitializer",
    "MemoryPermissionStore",
    "AsyncPGPermissionStore",
    "MemoryDynamicPermissionStore",
    "AsyncPGDynamicPermissionStore",
    "CachedPermissionStore",
    "PermissionCacheInvalidator",
    "DynamicPermissionDefinitionProvider",
    "SystemPermissionDefinitionProvider",
    "PermissionSystem",
    "create_permission_system",
    "create_postgres_permission_system",
]

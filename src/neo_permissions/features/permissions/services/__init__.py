"""Permission services."""

from .definition_manager import PermissionDefinitionManager
from .event_bus import PermissionEventBus, EventHandler
from .permission_checker import PermissionChecker, PermissionCheckResult
from .permission_manager import PermissionManager, GrantDiff
from .management_service import (
    PermissionManagementService,
    PermissionGrantInfo,
    PermissionGroupGrantInfo,
    UpdatePermissionRequest,
)
from .dynamic_permission_service import DynamicPermissionService
from .data_seeder import PermissionDataSeeder, PermissionInitializer, SeedResult

__all__ = [
    "PermissionDefinitionManager",
    "PermissionEventBus",
    "EventHandler",
    "PermissionChecker",
    "PermissionCheckResult",
    "PermissionManager",
    "GrantDiff",
    "PermissionManagementService",
    "PermissionGrantInfo",
    "PermissionGroupGrantInfo",
    "UpdatePermissionRequest",
    "DynamicPermissionService",
    "PermissionDataSeeder",
    "PermissionInitializer",
    "SeedResult",
]

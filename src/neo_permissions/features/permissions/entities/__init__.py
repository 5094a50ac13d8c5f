"""Permission entities and protocols."""

from .definition import (
    PermissionDefinition,
    PermissionGroupDefinition,
    PermissionDefinitionContext,
)
from .grant import (
    GrantStatus,
    ProviderKind,
    PermissionGrant,
    validate_permission_name,
    validate_provider_key,
)
from .principal import Principal
from .dynamic import DynamicPermissionRecord, DEFAULT_GROUP_NAME
from .events import (
    PermissionChangedEvent,
    PermissionGranted,
    PermissionRevoked,
    PermissionProhibited,
    PERMISSION_CHANGE_EVENTS,
)
from .protocols import (
    PermissionStore,
    DynamicPermissionStore,
    PermissionDefinitionProvider,
)

__all__ = [
    "PermissionDefinition",
    "PermissionGroupDefinition",
    "PermissionDefinitionContext",
    "GrantStatus",
    "ProviderKind",
    "PermissionGrant",
    "validate_permission_name",
    "validate_provider_key",
    "Principal",
    "DynamicPermissionRecord",
    "DEFAULT_GROUP_NAME",
    "PermissionChangedEvent",
    "PermissionGranted",
    "PermissionRevoked",
    "PermissionProhibited",
    "PERMISSION_CHANGE_EVENTS",
    "PermissionStore",
    "DynamicPermissionStore",
    "PermissionDefinitionProvider",
]

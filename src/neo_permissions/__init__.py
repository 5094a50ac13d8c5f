"""neo-permissions: permission definitions and multi-tenant grant resolution."""

from .__version__ import __version__
from .core.exceptions import (
    NeoPermissionsError,
    ValidationError,
    NotFoundError,
    PermissionNotFoundError,
    ConflictError,
    DependencyError,
    StoreError,
    CacheError,
)
from .core.shared import current_tenant
from .features.permissions import (
    GrantStatus,
    ProviderKind,
    Principal,
    PermissionChecker,
    PermissionManager,
    PermissionDefinitionManager,
    create_permission_system,
)

__all__ = [
    "__version__",
    "NeoPermissionsError",
    "ValidationError",
    "NotFoundError",
    "PermissionNotFoundError",
    "ConflictError",
    "DependencyError",
    "StoreError",
    "CacheError",
    "current_tenant",
    "GrantStatus",
    "ProviderKind",
    "Principal",
    "PermissionChecker",
    "PermissionManager",
    "PermissionDefinitionManager",
    "create_permission_system",
]

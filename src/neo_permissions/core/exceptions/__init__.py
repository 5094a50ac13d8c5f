"""Exception hierarchy for neo-permissions."""

from .base import NeoPermissionsError
from .domain import (
    ValidationError,
    NotFoundError,
    PermissionNotFoundError,
    GroupNotFoundError,
    ConflictError,
    DependencyError,
    ConfigurationError,
    RegistryFrozenError,
    StoreError,
    CacheError,
)
from .http_mapping import HTTP_STATUS_MAP, get_http_status_code

__all__ = [
    "NeoPermissionsError",
    "get_http_status_code",
    "ValidationError",
    "NotFoundError",
    "PermissionNotFoundError",
    "GroupNotFoundError",
    "ConflictError",
    "DependencyError",
    "ConfigurationError",
    "RegistryFrozenError",
    "StoreError",
    "CacheError",
    "HTTP_STATUS_MAP",
]

"""Permission definition providers."""

from .dynamic_provider import DynamicPermissionDefinitionProvider
from .system_provider import SystemPermissionDefinitionProvider, ADMINISTRATION_GROUP

__all__ = [
    "DynamicPermissionDefinitionProvider",
    "SystemPermissionDefinitionProvider",
    "ADMINISTRATION_GROUP",
]

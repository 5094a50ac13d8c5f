"""Domain exceptions for permission definitions, grants and stores."""

from .base import NeoPermissionsError


# Validation
class ValidationError(NeoPermissionsError):
    """Raised when a name, provider kind or provider key is missing or invalid."""
    pass


# Lookup
class NotFoundError(NeoPermissionsError):
    """Raised when a referenced definition does not exist."""
    pass


class PermissionNotFoundError(NotFoundError):
    """Raised when a permission name is not registered."""
    pass


class GroupNotFoundError(NotFoundError):
    """Raised when a permission group is not registered."""
    pass


# Registration
class ConflictError(NeoPermissionsError):
    """Raised when a group or permission name is registered twice."""
    pass


class DependencyError(NeoPermissionsError):
    """Raised when a dynamic permission references a parent that cannot be resolved."""
    pass


class ConfigurationError(NeoPermissionsError):
    """Raised when the permission system is wired or used incorrectly."""
    pass


class RegistryFrozenError(ConfigurationError):
    """Raised when definitions are added after the registry was initialized."""
    pass


# Infrastructure
class StoreError(NeoPermissionsError):
    """Raised when the underlying persistence layer fails."""
    pass


class CacheError(NeoPermissionsError):
    """Raised when the cache backend is unavailable or returns invalid data."""
    pass

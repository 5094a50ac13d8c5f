"""FastAPI integration for neo-permissions."""

from .dependencies import PermissionDependencies, principal_from_request_state
from .exception_handlers import register_exception_handlers
from .middleware import TenantContextMiddleware
from .policy import PermissionPolicyResolver
from .routers import create_permission_router

__all__ = [
    "PermissionDependencies",
    "principal_from_request_state",
    "register_exception_handlers",
    "TenantContextMiddleware",
    "PermissionPolicyResolver",
    "create_permission_router",
]

"""FastAPI dependencies enforcing permissions on routes."""

import inspect
import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Optional, Union

from fastapi import HTTPException, Request, status

from ..core.exceptions import ConfigurationError
from ..features.permissions.entities import Principal
from ..features.permissions.services import PermissionChecker
from .policy import PermissionPolicyResolver

if TYPE_CHECKING:
    from ..features.permissions.module import PermissionSystem

logger = logging.getLogger(__name__)

PrincipalGetter = Callable[[Request], Union[Principal, Awaitable[Principal]]]


def principal_from_request_state(request: Request) -> Principal:
    """Default principal getter: whatever authentication put on ``request.state``."""
    principal = getattr(request.state, "principal", None)
    return principal if principal is not None else Principal.anonymous()


class PermissionDependencies:
    """FastAPI permission dependencies factory."""
    
    def __init__(
        self,
        checker: PermissionChecker,
        principal_getter: PrincipalGetter = principal_from_request_state,
        policy_resolver: Optional[PermissionPolicyResolver] = None,
    ):
        self.checker = checker
        self.principal_getter = principal_getter
        self.policy_resolver = policy_resolver or PermissionPolicyResolver()
    
    @classmethod
    def from_system(
        cls,
        system: "PermissionSystem",
        principal_getter: PrincipalGetter = principal_from_request_state,
    ) -> "PermissionDependencies":
        """Dependencies bound to ``system``'s checker and configured policy prefix."""
        return cls(
            system.checker,
            principal_getter=principal_getter,
            policy_resolver=PermissionPolicyResolver(prefix=system.settings.policy_prefix),
        )
    
    async def get_principal(self, request: Request) -> Principal:
        principal = self.principal_getter(request)
        if inspect.isawaitable(principal):
            principal = await principal
        return principal
    
    def require_permission(self, permission_name: str):
        """Require the current principal to hold ``permission_name``."""
        
        async def dependency(request: Request) -> Principal:
            principal = await self.get_principal(request)
            if not principal.is_authenticated:
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Authentication required"
                )
            
            if not await self.checker.is_granted(principal, permission_name):
                logger.warning(f"Permission {permission_name} denied for {principal.id}")
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"Permission '{permission_name}' required"
                )
            return principal
        
        return dependency
    
    def require_policy(self, policy_name: str):
        """Require a ``Permission.<name>`` policy."""
        permission_name = self.policy_resolver.parse(policy_name)
        if permission_name is None:
            raise ConfigurationError(
                f"'{policy_name}' is not a permission policy",
                details={"policy": policy_name, "prefix": self.policy_resolver.prefix}
            )
        return self.require_permission(permission_name)

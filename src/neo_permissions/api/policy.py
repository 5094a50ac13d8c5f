"""Permission policy names of the form ``Permission.<name>``."""

from typing import Optional


class PermissionPolicyResolver:
    """Maps policy names onto permission names."""
    
    def __init__(self, prefix: str = "Permission"):
        self.prefix = prefix
    
    def parse(self, policy_name: Optional[str]) -> Optional[str]:
        """Return the permission name, or None for non-permission policies."""
        if not policy_name or not policy_name.startswith(f"{self.prefix}."):
            return None
        name = policy_name[len(self.prefix) + 1:]
        return name or None
    
    def policy_for(self, permission_name: str) -> str:
        return f"{self.prefix}.{permission_name}"

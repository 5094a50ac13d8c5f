"""Built-in administration permissions."""

from ..entities import PermissionDefinitionContext

ADMINISTRATION_GROUP = "Administration"

CRUD_ACTIONS = ("Create", "Update", "Delete", "View")


class SystemPermissionDefinitionProvider:
    """Defines user, role and permission management permissions."""
    
    def define(self, context: PermissionDefinitionContext) -> None:
        admin_group = context.add_group(ADMINISTRATION_GROUP, "System Administration")
        
        user_management = admin_group.add_permission(
            "UserManagement", "User Management", "Manage system users"
        )
        for action in CRUD_ACTIONS:
            user_management.add_child(f"UserManagement.{action}", f"{action} Users")
        
        role_management = admin_group.add_permission(
            "RoleManagement", "Role Management", "Manage system roles"
        )
        for action in CRUD_ACTIONS:
            role_management.add_child(f"RoleManagement.{action}", f"{action} Roles")
        
        admin_group.add_permission(
            "PermissionManagement", "Permission Management", "Manage system permissions"
        )

"""Permission and permission group definitions.

Definitions are kept in a flat, name-indexed map owned by a
``PermissionDefinitionContext``. Parents, children and groups refer to each
other by name, so the whole structure can be walked or serialized without
following object references.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from ....core.exceptions import (
    ConflictError,
    GroupNotFoundError,
    PermissionNotFoundError,
    RegistryFrozenError,
    ValidationError,
)


def _require_name(name: Optional[str], kind: str) -> str:
    if name is None or not str(name).strip():
        raise ValidationError(f"{kind} name cannot be empty")
    return name


@dataclass
class PermissionDefinition:
    """A named, checkable capability."""
    
    name: str
    display_name: Optional[str] = None
    description: Optional[str] = None
    is_granted_by_default: bool = False
    group_name: Optional[str] = None
    parent_name: Optional[str] = None
    children: List[str] = field(default_factory=list)
    _context: Optional["PermissionDefinitionContext"] = field(
        default=None, repr=False, compare=False
    )
    
    def __post_init__(self):
        _require_name(self.name, "Permission")
        if not self.display_name:
            self.display_name = self.name
    
    def add_child(
        self,
        name: str,
        display_name: Optional[str] = None,
        description: Optional[str] = None,
        is_granted_by_default: bool = False,
    ) -> "PermissionDefinition":
        """Register a child permission under this one."""
        return self._require_context().add_permission(
            name,
            display_name=display_name,
            description=description,
            is_granted_by_default=is_granted_by_default,
            parent_name=self.name,
        )
    
    @property
    def full_name(self) -> str:
        """Dot-joined chain of names from the root permission down to this one."""
        if self._context is None:
            return self.name
        return ".".join(p.name for p in reversed(list(self._context.iter_ancestry(self.name))))
    
    @property
    def level(self) -> int:
        """Distance from the root permission, the root being level 1."""
        if self._context is None:
            return 1
        return sum(1 for _ in self._context.iter_ancestry(self.name))
    
    @property
    def is_root(self) -> bool:
        return self.parent_name is None
    
    def _require_context(self) -> "PermissionDefinitionContext":
        if self._context is None:
            raise RegistryFrozenError(
                f"Permission '{self.name}' is not attached to a definition context"
            )
        return self._context


@dataclass
class PermissionGroupDefinition:
    """Display bucket of top-level permissions."""
    
    name: str
    display_name: Optional[str] = None
    permissions: List[str] = field(default_factory=list)
    _context: Optional["PermissionDefinitionContext"] = field(
        default=None, repr=False, compare=False
    )
    
    def __post_init__(self):
        _require_name(self.name, "Group")
        if not self.display_name:
            self.display_name = self.name
    
    def add_permission(
        self,
        name: str,
        display_name: Optional[str] = None,
        description: Optional[str] = None,
        is_granted_by_default: bool = False,
    ) -> PermissionDefinition:
        """Register a top-level permission in this group."""
        if self._context is None:
            raise RegistryFrozenError(f"Group '{self.name}' is not attached to a definition context")
        return self._context.add_permission(
            name,
            display_name=display_name,
            description=description,
            is_granted_by_default=is_granted_by_default,
            group_name=self.name,
        )


class PermissionDefinitionContext:
    """Builder handed to definition providers.
    
    Collects groups and permissions while providers run. Once frozen, every
    attempt to add a definition raises ``RegistryFrozenError``.
    """
    
    def __init__(self):
        self._groups: Dict[str, PermissionGroupDefinition] = {}
        self._permissions: Dict[str, PermissionDefinition] = {}
        self._frozen = False
    
    @property
    def is_frozen(self) -> bool:
        return self._frozen
    
    def freeze(self) -> None:
        self._frozen = True
    
    def copy(self) -> "PermissionDefinitionContext":
        """Mutable deep copy; definitions in the copy are attached to the copy."""
        clone = deepcopy(self)
        clone._frozen = False
        return clone
    
    def add_group(self, name: str, display_name: Optional[str] = None) -> PermissionGroupDefinition:
        self._ensure_mutable()
        _require_name(name, "Group")
        if name in self._groups:
            raise ConflictError(
                f"Permission group '{name}' is already defined",
                details={"group": name}
            )
        
        group = PermissionGroupDefinition(name=name, display_name=display_name, _context=self)
        self._groups[name] = group
        return group
    
    def get_group(self, name: str) -> PermissionGroupDefinition:
        group = self._groups.get(name)
        if group is None:
            raise GroupNotFoundError(
                f"Permission group '{name}' is not defined",
                details={"group": name}
            )
        return group
    
    def get_group_or_none(self, name: str) -> Optional[PermissionGroupDefinition]:
        return self._groups.get(name)
    
    def add_permission(
        self,
        name: str,
        display_name: Optional[str] = None,
        description: Optional[str] = None,
        is_granted_by_default: bool = False,
        group_name: Optional[str] = None,
        parent_name: Optional[str] = None,
    ) -> PermissionDefinition:
        """Register a permission either in a group or under a parent.
        
        Children inherit the group of their parent.
        """
        self._ensure_mutable()
        _require_name(name, "Permission")
        if name in self._permissions:
            raise ConflictError(
                f"Permission '{name}' is already defined",
                details={"permission": name}
            )
        
        parent = None
        if parent_name is not None:
            parent = self.get_permission(parent_name)
            group_name = parent.group_name
        elif group_name is not None:
            self.get_group(group_name)
        
        permission = PermissionDefinition(
            name=name,
            display_name=display_name,
            description=description,
            is_granted_by_default=is_granted_by_default,
            group_name=group_name,
            parent_name=parent_name,
            _context=self,
        )
        self._permissions[name] = permission
        
        if parent is not None:
            parent.children.append(name)
        elif group_name is not None:
            self._groups[group_name].permissions.append(name)
        
        return permission
    
    def get_permission(self, name: str) -> PermissionDefinition:
        permission = self._permissions.get(name)
        if permission is None:
            raise PermissionNotFoundError(
                f"Permission '{name}' is not defined",
                details={"permission": name}
            )
        return permission
    
    def get_permission_or_none(self, name: str) -> Optional[PermissionDefinition]:
        return self._permissions.get(name)
    
    def iter_ancestry(self, name: str) -> Iterator[PermissionDefinition]:
        """Yield the permission named ``name`` followed by each of its ancestors."""
        current = self._permissions.get(name)
        while current is not None:
            yield current
            current = self._permissions.get(current.parent_name) if current.parent_name else None
    
    @property
    def groups(self) -> List[PermissionGroupDefinition]:
        return list(self._groups.values())
    
    @property
    def permissions(self) -> List[PermissionDefinition]:
        return list(self._permissions.values())
    
    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("Permission definitions are frozen after initialization")

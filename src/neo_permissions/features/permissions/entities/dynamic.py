"""Runtime-authored permission records."""

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID, uuid4

from ....core.exceptions import ValidationError

DEFAULT_GROUP_NAME = "Default"


@dataclass
class DynamicPermissionRecord:
    """A permission definition persisted per tenant instead of declared in code."""
    
    name: str
    display_name: Optional[str] = None
    parent_name: Optional[str] = None
    group_name: str = DEFAULT_GROUP_NAME
    is_granted_by_default: bool = False
    description: Optional[str] = None
    tenant_id: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    
    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValidationError("Dynamic permission name cannot be empty")
        if not self.display_name:
            self.display_name = self.name
        if not self.group_name:
            self.group_name = DEFAULT_GROUP_NAME
        if self.parent_name is not None and not self.parent_name.strip():
            self.parent_name = None

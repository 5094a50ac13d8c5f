"""Request and response models of the permission administration API."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PermissionNodeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    
    name: str
    display_name: str
    parent_name: Optional[str] = None
    is_granted_by_default: bool = False
    is_granted: bool = False
    is_prohibited: bool = False
    children: List["PermissionNodeResponse"] = Field(default_factory=list)


PermissionNodeResponse.model_rebuild()


class PermissionGroupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    
    name: str
    display_name: str
    permissions: List[PermissionNodeResponse] = Field(default_factory=list)


class UpdatePermissionItem(BaseModel):
    name: str = Field(..., min_length=1)
    is_granted: bool


class UpdatePermissionsRequest(BaseModel):
    permissions: List[UpdatePermissionItem] = Field(default_factory=list)


class DynamicPermissionRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    display_name: Optional[str] = Field(default=None, max_length=256)
    parent_name: Optional[str] = Field(default=None, max_length=128)
    group_name: str = Field(default="Default", min_length=1, max_length=128)
    is_granted_by_default: bool = False
    description: Optional[str] = None


class DynamicPermissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    
    name: str
    display_name: str
    parent_name: Optional[str] = None
    group_name: str
    is_granted_by_default: bool
    description: Optional[str] = None
    tenant_id: Optional[str] = None


class PermissionCheckRequest(BaseModel):
    names: List[str] = Field(..., min_length=1)


class PermissionCheckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    
    name: str
    is_granted: bool

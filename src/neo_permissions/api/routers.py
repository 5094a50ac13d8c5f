"""Administration and self-check routes for permissions."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status

from ..features.permissions.entities import DynamicPermissionRecord
from ..features.permissions.module import PermissionSystem
from ..features.permissions.services import UpdatePermissionRequest
from .dependencies import PermissionDependencies
from .models import (
    DynamicPermissionRequest,
    DynamicPermissionResponse,
    PermissionCheckRequest,
    PermissionCheckResponse,
    PermissionGroupResponse,
    UpdatePermissionsRequest,
)


def create_permission_router(
    system: PermissionSystem,
    dependencies: PermissionDependencies,
    admin_permission: Optional[str] = "PermissionManagement",
    prefix: str = "/permissions",
) -> APIRouter:
    """Build the permission router.
    
    Administrative routes require ``admin_permission`` unless it is None.
    """
    router = APIRouter(prefix=prefix, tags=["permissions"])
    admin_guard = [Depends(dependencies.require_permission(admin_permission))] if admin_permission else []
    
    def _record_from_request(body: DynamicPermissionRequest, name: Optional[str] = None) -> DynamicPermissionRecord:
        return DynamicPermissionRecord(
            name=name or body.name,
            display_name=body.display_name,
            parent_name=body.parent_name,
            group_name=body.group_name,
            is_granted_by_default=body.is_granted_by_default,
            description=body.description,
            tenant_id=system.tenant.id,
        )
    
    @router.get(
        "/grants/{provider_kind}/{provider_key}",
        response_model=List[PermissionGroupResponse],
        dependencies=admin_guard,
    )
    async def get_grants(provider_kind: str, provider_key: str):
        tree = await system.management.get_grant_tree(provider_kind, provider_key)
        return [PermissionGroupResponse.model_validate(group) for group in tree]
    
    @router.put(
        "/grants/{provider_kind}/{provider_key}",
        status_code=status.HTTP_204_NO_CONTENT,
        dependencies=admin_guard,
    )
    async def update_grants(provider_kind: str, provider_key: str, body: UpdatePermissionsRequest):
        await system.management.update(
            provider_kind,
            provider_key,
            [UpdatePermissionRequest(name=item.name, is_granted=item.is_granted) for item in body.permissions],
        )
    
    @router.get("/dynamic", response_model=List[DynamicPermissionResponse], dependencies=admin_guard)
    async def list_dynamic_permissions():
        records = await system.dynamic_permissions.get_list()
        return [DynamicPermissionResponse.model_validate(record) for record in records]
    
    @router.post(
        "/dynamic",
        response_model=DynamicPermissionResponse,
        status_code=status.HTTP_201_CREATED,
        dependencies=admin_guard,
    )
    async def create_dynamic_permission(body: DynamicPermissionRequest):
        record = await system.dynamic_permissions.create(_record_from_request(body))
        return DynamicPermissionResponse.model_validate(record)
    
    @router.put("/dynamic/{name}", response_model=DynamicPermissionResponse, dependencies=admin_guard)
    async def update_dynamic_permission(name: str, body: DynamicPermissionRequest):
        record = await system.dynamic_permissions.update(_record_from_request(body, name=name))
        return DynamicPermissionResponse.model_validate(record)
    
    @router.delete("/dynamic/{name}", status_code=status.HTTP_204_NO_CONTENT, dependencies=admin_guard)
    async def delete_dynamic_permission(name: str):
        await system.dynamic_permissions.delete(name)
    
    @router.post("/check", response_model=List[PermissionCheckResponse])
    async def check_permissions(request: Request, body: PermissionCheckRequest):
        principal = await dependencies.get_principal(request)
        results = await system.checker.is_granted_many(principal, body.names)
        return [PermissionCheckResponse.model_validate(result) for result in results]
    
    return router

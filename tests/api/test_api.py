"""Tests for the FastAPI integration."""

from contextlib import asynccontextmanager

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from neo_permissions.api import (
    PermissionDependencies,
    PermissionPolicyResolver,
    TenantContextMiddleware,
    create_permission_router,
    register_exception_handlers,
)
from neo_permissions.config import PermissionSettings
from neo_permissions.core.exceptions import ConfigurationError
from neo_permissions.features.permissions import Principal, create_permission_system


def principal_from_headers(request: Request) -> Principal:
    """Stand-in for real authentication in these tests."""
    user_id = request.headers.get("X-User-Id")
    if not user_id:
        return Principal.anonymous()
    roles = [r for r in request.headers.get("X-Roles", "").split(",") if r]
    return Principal(id=user_id, roles=roles)


ADMIN = {"X-User-Id": "admin", "X-Roles": "Admin"}
MANAGER = {"X-User-Id": "user-a", "X-Roles": "Manager"}
CLERK = {"X-User-Id": "user-b", "X-Roles": "Clerk"}


@pytest.fixture
def api_system(providers, backing_store, cache):
    settings = PermissionSettings(
        _env_file=None,
        cache_enabled=True,
        role_permissions={
            "Admin": ["PermissionManagement"],
            "Manager": ["Orders.View"],
        },
    )
    return create_permission_system(settings=settings, providers=providers, store=backing_store, cache=cache)


@pytest.fixture
def client(api_system):
    dependencies = PermissionDependencies.from_system(api_system, principal_getter=principal_from_headers)
    
    @asynccontextmanager
    async def lifespan(app):
        await api_system.start()
        await api_system.initializer.initialize(tenant_id="t1")
        yield
        await api_system.stop()
    
    app = FastAPI(lifespan=lifespan)
    app.add_middleware(TenantContextMiddleware, tenant_header=api_system.settings.tenant_header)
    register_exception_handlers(app)
    app.include_router(create_permission_router(api_system, dependencies))
    
    @app.get("/orders", dependencies=[Depends(dependencies.require_policy("Permission.Orders.View"))])
    async def list_orders():
        return {"orders": []}
    
    with TestClient(app) as test_client:
        yield test_client


class TestPermissionPolicyResolver:
    
    def test_parse(self):
        resolver = PermissionPolicyResolver()
        
        assert resolver.parse("Permission.Orders.View") == "Orders.View"
        assert resolver.parse("Permission.") is None
        assert resolver.parse("PermissionOrders") is None
        assert resolver.parse("Admin") is None
        assert resolver.policy_for("Orders.View") == "Permission.Orders.View"
    
    def test_non_permission_policy_is_a_configuration_error(self, api_system):
        dependencies = PermissionDependencies(api_system.checker)
        
        with pytest.raises(ConfigurationError):
            dependencies.require_policy("AdminOnly")
    
    def test_from_system_uses_configured_prefix(self, api_system):
        api_system.settings.policy_prefix = "Perm"
        dependencies = PermissionDependencies.from_system(api_system)
        
        assert dependencies.policy_resolver.parse("Perm.Orders.View") == "Orders.View"
        assert dependencies.policy_resolver.parse("Permission.Orders.View") is None


class TestProtectedRoute:
    
    def test_anonymous_is_unauthorized(self, client):
        assert client.get("/orders").status_code == 401
    
    def test_role_grant_allows_and_missing_grant_forbids(self, client):
        assert client.get("/orders", headers=MANAGER).status_code == 200
        assert client.get("/orders", headers=CLERK).status_code == 403
    
    def test_user_prohibition_overrides_role(self, client):
        response = client.put(
            "/permissions/grants/U/user-a",
            json={"permissions": [{"name": "Orders.View", "is_granted": False}]},
            headers=ADMIN,
        )
        
        assert response.status_code == 204
        assert client.get("/orders", headers=MANAGER).status_code == 403
    
    def test_grants_are_scoped_to_tenant_header(self, client):
        response = client.put(
            "/permissions/grants/U/user-b",
            json={"permissions": [{"name": "Orders.View", "is_granted": True}]},
            headers={**ADMIN, "TenantId": "t1"},
        )
        assert response.status_code == 204
        
        assert client.get("/orders", headers={**CLERK, "TenantId": "t1"}).status_code == 200
        assert client.get("/orders", headers={**CLERK, "TenantId": "t2"}).status_code == 403
        assert client.get("/orders", headers=CLERK).status_code == 403


class TestGrantAdministration:
    
    def test_grant_tree_annotates_nodes(self, client):
        response = client.get("/permissions/grants/R/Manager", headers=ADMIN)
        
        assert response.status_code == 200
        groups = {g["name"]: g for g in response.json()}
        orders = {p["name"]: p for p in groups["Orders"]["permissions"]}
        assert orders["Orders.View"]["is_granted"] is True
        assert orders["Orders.View"]["is_prohibited"] is False
        assert orders["Orders.View"]["children"][0]["name"] == "Orders.Export"
        assert orders["Orders.Create"]["is_granted"] is False
        assert "Administration" in groups
    
    def test_admin_routes_require_permission_management(self, client):
        assert client.get("/permissions/grants/R/Manager", headers=MANAGER).status_code == 403
    
    def test_invalid_provider_kind_is_bad_request(self, client):
        response = client.get("/permissions/grants/X/Manager", headers=ADMIN)
        
        assert response.status_code == 400
        assert response.json()["error"]["type"] == "ValidationError"
    
    def test_unknown_permission_update_is_not_found(self, client):
        response = client.put(
            "/permissions/grants/R/Manager",
            json={"permissions": [{"name": "Orders.Typo", "is_granted": True}]},
            headers=ADMIN,
        )
        
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "PermissionNotFoundError"


class TestDynamicPermissionRoutes:
    
    def test_crud_cycle(self, client):
        created = client.post(
            "/permissions/dynamic",
            json={"name": "Reports", "display_name": "Reports", "group_name": "Reporting"},
            headers=ADMIN,
        )
        assert created.status_code == 201
        assert created.json()["group_name"] == "Reporting"
        
        assert client.post("/permissions/dynamic", json={"name": "Reports"}, headers=ADMIN).status_code == 409
        assert client.post(
            "/permissions/dynamic", json={"name": "Orphan", "parent_name": "Nope"}, headers=ADMIN
        ).status_code == 422
        
        updated = client.put(
            "/permissions/dynamic/Reports",
            json={"name": "Reports", "display_name": "All reports", "group_name": "Reporting"},
            headers=ADMIN,
        )
        assert updated.json()["display_name"] == "All reports"
        
        listed = client.get("/permissions/dynamic", headers=ADMIN).json()
        assert [r["name"] for r in listed] == ["Reports"]
        
        tree = client.get("/permissions/grants/R/Manager", headers=ADMIN).json()
        assert "Reporting" in [g["name"] for g in tree]
        
        assert client.delete("/permissions/dynamic/Reports", headers=ADMIN).status_code == 204
        assert client.delete("/permissions/dynamic/Reports", headers=ADMIN).status_code == 404


class TestCheckRoute:
    
    def test_check_reports_each_name(self, client):
        response = client.post(
            "/permissions/check",
            json={"names": ["Orders.View", "Orders.Create", "Orders.Dashboard"]},
            headers=MANAGER,
        )
        
        assert response.status_code == 200
        assert response.json() == [
            {"name": "Orders.View", "is_granted": True},
            {"name": "Orders.Create", "is_granted": False},
            {"name": "Orders.Dashboard", "is_granted": True},
        ]
    
    def test_check_unknown_name_is_not_found(self, client):
        response = client.post("/permissions/check", json={"names": ["Orders.Typo"]}, headers=MANAGER)
        
        assert response.status_code == 404
    
    def test_tenant_authored_permission_is_usable_in_that_tenant(self, client):
        tenant_admin = {**ADMIN, "TenantId": "t1"}
        created = client.post(
            "/permissions/dynamic",
            json={"name": "Orders.Refund", "parent_name": "Orders.View"},
            headers=tenant_admin,
        )
        assert created.status_code == 201
        assert created.json()["tenant_id"] == "t1"
        
        granted = client.put(
            "/permissions/grants/U/user-b",
            json={"permissions": [{"name": "Orders.Refund", "is_granted": True}]},
            headers=tenant_admin,
        )
        assert granted.status_code == 204
        
        checked = client.post("/permissions/check", json={"names": ["Orders.Refund"]}, headers={**CLERK, "TenantId": "t1"})
        assert checked.json() == [{"name": "Orders.Refund", "is_granted": True}]
        
        assert client.post("/permissions/check", json={"names": ["Orders.Refund"]}, headers=CLERK).status_code == 404
        assert client.get("/permissions/dynamic", headers=ADMIN).json() == []

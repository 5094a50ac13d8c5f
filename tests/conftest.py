"""Pytest configuration and fixtures for neo-permissions tests."""

import pytest
from unittest.mock import AsyncMock

from neo_permissions.config import PermissionSettings
from neo_permissions.features.cache import MemoryAdapter
from neo_permissions.features.permissions import (
    MemoryPermissionStore,
    Principal,
    SystemPermissionDefinitionProvider,
    create_permission_system,
)


class OrdersPermissionProvider:
    """Small permission tree shared by most tests."""
    
    def define(self, context):
        group = context.add_group("Orders", "Order Management")
        view = group.add_permission("Orders.View", "View orders")
        view.add_child("Orders.Export", "Export orders")
        group.add_permission("Orders.Create", "Create orders")
        group.add_permission("Orders.Dashboard", "Order dashboard", is_granted_by_default=True)
        group.add_permission("Orders.Archive", "Archive orders")


@pytest.fixture
def settings():
    return PermissionSettings(
        cache_enabled=True,
        cache_backend="memory",
        cache_ttl_seconds=60,
        default_roles=["Manager", "Clerk"],
        role_permissions={"Manager": ["Orders.View", "Orders.Create"]},
    )


@pytest.fixture
def providers():
    return [SystemPermissionDefinitionProvider(), OrdersPermissionProvider()]


@pytest.fixture
def backing_store():
    return MemoryPermissionStore()


@pytest.fixture
def cache():
    return MemoryAdapter(max_size=100)


@pytest.fixture
def permission_system(settings, providers, backing_store, cache):
    return create_permission_system(
        settings=settings,
        providers=providers,
        store=backing_store,
        cache=cache,
    )


@pytest.fixture
def checker(permission_system):
    return permission_system.checker


@pytest.fixture
def manager(permission_system):
    return permission_system.manager


@pytest.fixture
def manager_principal():
    return Principal(id="user-a", roles=("Manager",))


@pytest.fixture
def clerk_principal():
    return Principal(id="user-b", roles=("Clerk",))


@pytest.fixture
def mock_store():
    """Mock PermissionStore for algorithm-level tests."""
    store = AsyncMock()
    store.is_granted = AsyncMock()
    store.get_all = AsyncMock(return_value=[])
    store.save = AsyncMock()
    store.delete = AsyncMock()
    return store


@pytest.fixture
def orders_provider_class():
    return OrdersPermissionProvider

"""Tests for role permission seeding."""

import pytest
from unittest.mock import AsyncMock

from neo_permissions.core.exceptions import StoreError
from neo_permissions.features.permissions import (
    PermissionDataSeeder,
    PermissionInitializer,
    Principal,
    ProviderKind,
)
from neo_permissions.features.permissions.services import SeedResult


class TestPermissionDataSeeder:
    
    @pytest.mark.asyncio
    async def test_bad_name_is_skipped_and_reported(self, permission_system):
        seeder = permission_system.seeder
        
        result = await seeder.grant_role_permissions("Manager", ["Orders.View", "Orders.Typo", "Orders.Create"])
        
        assert result.granted == ["Orders.View", "Orders.Create"]
        assert list(result.failed) == ["Orders.Typo"]
        assert result.has_failures
        grants = await permission_system.manager.get_all(ProviderKind.ROLE, "Manager")
        assert {g.name for g in grants} == {"Orders.View", "Orders.Create"}
    
    @pytest.mark.asyncio
    async def test_store_failure_on_one_item_does_not_abort_run(self, permission_system):
        manager = AsyncMock()
        manager.grant = AsyncMock(side_effect=[StoreError("write failed"), None])
        seeder = PermissionDataSeeder(manager, permission_system.definition_manager)
        
        result = await seeder.grant_role_permissions("Manager", ["Orders.View", "Orders.Create"])
        
        assert result.granted == ["Orders.Create"]
        assert "write failed" in result.failed["Orders.View"]


class TestPermissionInitializer:
    
    @pytest.mark.asyncio
    async def test_initializer_seeds_configured_role_permissions(self, permission_system, manager_principal):
        results = await permission_system.initializer.initialize()
        
        assert [r.role for r in results] == ["Manager"]
        assert await permission_system.checker.is_granted(manager_principal, "Orders.Create") is True
    
    @pytest.mark.asyncio
    async def test_start_initializes_registry_and_seeds(self, permission_system):
        await permission_system.start()
        
        assert permission_system.definition_manager.is_initialized
        principal = Principal(id="someone", roles=("Manager",))
        assert await permission_system.checker.is_granted(principal, "Orders.View") is True
        await permission_system.stop()
    
    @pytest.mark.asyncio
    async def test_initializer_creates_default_roles_first(self, settings):
        seeder = AsyncMock()
        seeder.grant_role_permissions = AsyncMock(return_value=SeedResult(role="Manager"))
        
        await PermissionInitializer(seeder, settings).initialize()
        
        seeder.create_roles.assert_awaited_once_with(["Manager", "Clerk"])
        seeder.grant_role_permissions.assert_awaited_once_with(
            "Manager", ["Orders.View", "Orders.Create"], tenant_id=None
        )

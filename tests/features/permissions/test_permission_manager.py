"""Tests for grant mutation and change events."""

import pytest
from unittest.mock import AsyncMock

from neo_permissions.core.exceptions import PermissionNotFoundError, StoreError, ValidationError
from neo_permissions.core.shared import current_tenant
from neo_permissions.features.permissions import (
    GrantStatus,
    PermissionDefinitionManager,
    PermissionEventBus,
    PermissionGranted,
    PermissionManager,
    PermissionProhibited,
    PermissionRevoked,
    ProviderKind,
)


@pytest.fixture
def recorded_events():
    return []


@pytest.fixture
def event_bus(recorded_events):
    bus = PermissionEventBus()
    
    async def record(event):
        recorded_events.append(event)
    
    for event_type in (PermissionGranted, PermissionRevoked, PermissionProhibited):
        bus.subscribe(event_type, record)
    return bus


@pytest.fixture
def mock_manager(orders_provider_class, mock_store, event_bus):
    registry = PermissionDefinitionManager([orders_provider_class()])
    return PermissionManager(registry, mock_store, event_bus=event_bus)


class TestPermissionManagerWrites:
    """Test write-through and event publication."""
    
    @pytest.mark.asyncio
    async def test_grant_upserts_and_publishes(self, mock_manager, mock_store, recorded_events):
        await mock_manager.grant("Orders.View", "R", "Manager")
        
        mock_store.save.assert_awaited_once_with("Orders.View", ProviderKind.ROLE, "Manager", None, True)
        assert recorded_events == [PermissionGranted("Orders.View", ProviderKind.ROLE, "Manager", None)]
    
    @pytest.mark.asyncio
    async def test_prohibit_persists_explicit_denial(self, mock_manager, mock_store, recorded_events):
        await mock_manager.prohibit("Orders.View", ProviderKind.USER, "u1")
        
        mock_store.save.assert_awaited_once_with("Orders.View", ProviderKind.USER, "u1", None, False)
        assert isinstance(recorded_events[0], PermissionProhibited)
    
    @pytest.mark.asyncio
    async def test_revoke_deletes_record(self, mock_manager, mock_store, recorded_events):
        await mock_manager.revoke("Orders.View", "U", "u1")
        
        mock_store.delete.assert_awaited_once_with("Orders.View", ProviderKind.USER, "u1", None)
        assert isinstance(recorded_events[0], PermissionRevoked)
    
    @pytest.mark.asyncio
    async def test_events_carry_current_tenant(self, mock_manager, recorded_events):
        with current_tenant.change("tenant-a"):
            await mock_manager.grant("Orders.View", "U", "u1")
        
        assert recorded_events[0].tenant_id == "tenant-a"
    
    @pytest.mark.asyncio
    async def test_unknown_permission_is_rejected_before_write(self, mock_manager, mock_store, recorded_events):
        with pytest.raises(PermissionNotFoundError):
            await mock_manager.grant("Orders.Missing", "R", "Manager")
        
        mock_store.save.assert_not_called()
        assert recorded_events == []
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind,key", [("", "Manager"), ("X", "Manager"), ("R", ""), (None, "Manager"), ("R", None)])
    async def test_invalid_provider_is_rejected(self, mock_manager, mock_store, kind, key):
        with pytest.raises(ValidationError):
            await mock_manager.grant("Orders.View", kind, key)
        
        mock_store.save.assert_not_called()
    
    @pytest.mark.asyncio
    async def test_store_failure_propagates_without_event(self, mock_manager, mock_store, recorded_events):
        mock_store.save.side_effect = StoreError("write failed")
        
        with pytest.raises(StoreError):
            await mock_manager.grant("Orders.View", "R", "Manager")
        assert recorded_events == []
    
    @pytest.mark.asyncio
    async def test_set_grants_or_prohibits(self, mock_manager, mock_store):
        await mock_manager.set("Orders.View", "R", "Manager", True)
        await mock_manager.set("Orders.Create", "R", "Manager", False)
        
        calls = [call.args for call in mock_store.save.await_args_list]
        assert calls == [
            ("Orders.View", ProviderKind.ROLE, "Manager", None, True),
            ("Orders.Create", ProviderKind.ROLE, "Manager", None, False),
        ]
    
    @pytest.mark.asyncio
    async def test_event_handler_failure_reaches_caller(self, mock_manager, event_bus):
        failing = AsyncMock(side_effect=RuntimeError("handler failed"))
        event_bus.subscribe(PermissionGranted, failing)
        
        with pytest.raises(RuntimeError):
            await mock_manager.grant("Orders.View", "R", "Manager")


class TestBatchOperations:
    """Test batch grant/revoke and the granted-set diff."""
    
    @pytest.mark.asyncio
    async def test_set_granted_set_applies_minimal_diff(self, manager):
        await manager.grant("Orders.Create", "R", "Manager")
        await manager.grant("Orders.Archive", "R", "Manager")
        
        diff = await manager.set_granted_set("R", "Manager", ["Orders.View", "Orders.Create"])
        
        assert diff.to_add == {"Orders.View"}
        assert diff.to_remove == {"Orders.Archive"}
        granted = {g.name for g in await manager.get_all("R", "Manager") if g.is_granted}
        assert granted == {"Orders.View", "Orders.Create"}
    
    @pytest.mark.asyncio
    async def test_set_granted_set_without_changes_writes_nothing(self, mock_manager, mock_store, recorded_events):
        diff = await mock_manager.set_granted_set("R", "Manager", [])
        
        assert diff.is_empty
        mock_store.save.assert_not_called()
        mock_store.delete.assert_not_called()
        assert recorded_events == []
    
    @pytest.mark.asyncio
    async def test_set_granted_set_regrants_prohibited_name(self, manager):
        await manager.prohibit("Orders.View", "U", "u1")
        
        diff = await manager.set_granted_set("U", "u1", ["Orders.View"])
        
        assert diff.to_add == {"Orders.View"}
        assert await manager.get_status("Orders.View", "U", "u1") == GrantStatus.GRANTED
    
    @pytest.mark.asyncio
    async def test_set_granted_set_validates_all_names_first(self, mock_manager, mock_store):
        with pytest.raises(PermissionNotFoundError):
            await mock_manager.set_granted_set("R", "Manager", ["Orders.View", "Orders.Missing"])
        
        mock_store.get_all.assert_not_called()
        mock_store.save.assert_not_called()
    
    @pytest.mark.asyncio
    async def test_batch_grant_and_revoke(self, manager):
        await manager.batch_grant(["Orders.View", "Orders.Export"], "R", "Clerk")
        assert {g.name for g in await manager.get_all("R", "Clerk")} == {"Orders.View", "Orders.Export"}
        
        await manager.batch_revoke(["Orders.View"], "R", "Clerk")
        assert {g.name for g in await manager.get_all("R", "Clerk")} == {"Orders.Export"}
    
    @pytest.mark.asyncio
    async def test_batch_grant_is_all_or_nothing_on_unknown_name(self, mock_manager, mock_store):
        with pytest.raises(PermissionNotFoundError):
            await mock_manager.batch_grant(["Orders.View", "Nope"], "R", "Clerk")
        
        mock_store.save.assert_not_called()

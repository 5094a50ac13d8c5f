"""Tests for the ambient tenant context."""

import asyncio

import pytest

from neo_permissions.core.shared import AMBIENT_TENANT, CurrentTenant, current_tenant


class TestCurrentTenant:
    
    def test_defaults_to_host_scope(self):
        assert current_tenant.id is None
        assert current_tenant.is_available is False
    
    def test_nested_changes_restore_in_stack_order(self):
        with current_tenant.change("a", name="Tenant A"):
            assert current_tenant.id == "a"
            assert current_tenant.name == "Tenant A"
            with current_tenant.change("b"):
                assert current_tenant.id == "b"
                with current_tenant.change(None):
                    assert current_tenant.id is None
                assert current_tenant.id == "b"
            assert current_tenant.id == "a"
        assert current_tenant.id is None
    
    def test_change_restores_on_exception(self):
        with pytest.raises(RuntimeError):
            with current_tenant.change("a"):
                raise RuntimeError("boom")
        
        assert current_tenant.id is None
    
    def test_resolve_prefers_explicit_value(self):
        tenant = CurrentTenant()
        with tenant.change("ambient"):
            assert tenant.resolve() == "ambient"
            assert tenant.resolve(AMBIENT_TENANT) == "ambient"
            assert tenant.resolve("explicit") == "explicit"
            assert tenant.resolve(None) is None
    
    @pytest.mark.asyncio
    async def test_concurrent_tasks_do_not_leak_tenants(self):
        seen = {}
        
        async def work(tenant_id):
            with current_tenant.change(tenant_id):
                await asyncio.sleep(0.01)
                seen[tenant_id] = current_tenant.id
        
        await asyncio.gather(work("a"), work("b"), work("c"))
        
        assert seen == {"a": "a", "b": "b", "c": "c"}
        assert current_tenant.id is None

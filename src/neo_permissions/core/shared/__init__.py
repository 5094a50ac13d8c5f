"""Shared request-scoped context."""

from .context import AMBIENT_TENANT, CurrentTenant, TenantInfo, current_tenant

__all__ = [
    "AMBIENT_TENANT",
    "CurrentTenant",
    "TenantInfo",
    "current_tenant",
]

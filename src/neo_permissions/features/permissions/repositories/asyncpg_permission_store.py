"""AsyncPG-based permission store.

Grants live in ``{schema}.permission_grants``. The unique index on
(name, provider_kind, provider_key, tenant_id) treats NULL tenants as equal,
and writes are upserts against it, so concurrent writes to one key are
last-write-wins.
"""

import logging
from typing import List, Optional

import asyncpg

from ....core.exceptions import StoreError
from ..entities import GrantStatus, PermissionGrant, ProviderKind

logger = logging.getLogger(__name__)


PERMISSION_GRANTS_SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS {schema}.permission_grants (
        id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        name VARCHAR(128) NOT NULL,
        provider_kind VARCHAR(64) NOT NULL,
        provider_key VARCHAR(64) NOT NULL,
        is_granted BOOLEAN NOT NULL,
        tenant_id VARCHAR(64),
        creation_time TIMESTAMPTZ NOT NULL DEFAULT NOW()
    );
    CREATE UNIQUE INDEX IF NOT EXISTS ux_permission_grants_key
        ON {schema}.permission_grants (name, provider_kind, provider_key, tenant_id)
        NULLS NOT DISTINCT;
    CREATE INDEX IF NOT EXISTS ix_permission_grants_provider
        ON {schema}.permission_grants (provider_kind, provider_key, tenant_id);
"""


class AsyncPGPermissionStore:
    """AsyncPG implementation of the PermissionStore protocol."""
    
    def __init__(self, pool: asyncpg.Pool, schema: str = "public"):
        self._pool = pool
        self.schema = schema
    
    def _build_grant_from_row(self, row: asyncpg.Record) -> PermissionGrant:
        """Build PermissionGrant entity from database row."""
        return PermissionGrant(
            id=row['id'],
            name=row['name'],
            provider_kind=ProviderKind(row['provider_kind']),
            provider_key=row['provider_key'],
            is_granted=row['is_granted'],
            tenant_id=row['tenant_id'],
            creation_time=row['creation_time'],
        )
    
    async def create_schema(self) -> None:
        try:
            async with self._pool.acquire() as conn:
                await conn.execute(PERMISSION_GRANTS_SCHEMA_SQL.format(schema=self.schema))
        except Exception as e:
            logger.error(f"Failed to create permission_grants table in {self.schema}: {e}")
            raise StoreError(f"Failed to create permission grant schema: {e}") from e
    
    async def is_granted(
        self,
        name: str,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str]
    ) -> GrantStatus:
        kind = ProviderKind.parse(provider_kind)
        try:
            async with self._pool.acquire() as conn:
                query = f"""
                    SELECT is_granted
                    FROM {self.schema}.permission_grants
                    WHERE name = $1 AND provider_kind = $2 AND provider_key = $3
                      AND tenant_id IS NOT DISTINCT FROM $4
                """
                row = await conn.fetchrow(query, name, kind.value, provider_key, tenant_id)
        except Exception as e:
            logger.error(f"Failed to read grant {name} for {kind.value}:{provider_key}: {e}")
            raise StoreError(
                f"Failed to read permission grant: {e}",
                details={"permission": name, "provider_kind": kind.value, "provider_key": provider_key}
            ) from e
        
        if row is None:
            return GrantStatus.UNDEFINED
        return GrantStatus.GRANTED if row['is_granted'] else GrantStatus.PROHIBITED
    
    async def get_all(
        self,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str]
    ) -> List[PermissionGrant]:
        kind = ProviderKind.parse(provider_kind)
        try:
            async with self._pool.acquire() as conn:
                query = f"""
                    SELECT id, name, provider_kind, provider_key, is_granted, tenant_id, creation_time
                    FROM {self.schema}.permission_grants
                    WHERE provider_kind = $1 AND provider_key = $2
                      AND tenant_id IS NOT DISTINCT FROM $3
                    ORDER BY name
                """
                rows = await conn.fetch(query, kind.value, provider_key, tenant_id)
        except Exception as e:
            logger.error(f"Failed to list grants for {kind.value}:{provider_key}: {e}")
            raise StoreError(f"Failed to list permission grants: {e}") from e
        
        return [self._build_grant_from_row(row) for row in rows]
    
    async def save(
        self,
        name: str,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str],
        is_granted: bool
    ) -> None:
        kind = ProviderKind.parse(provider_kind)
        try:
            async with self._pool.acquire() as conn:
                query = f"""
                    INSERT INTO {self.schema}.permission_grants
                        (name, provider_kind, provider_key, tenant_id, is_granted)
                    VALUES ($1, $2, $3, $4, $5)
                    ON CONFLICT (name, provider_kind, provider_key, tenant_id)
                    DO UPDATE SET is_granted = EXCLUDED.is_granted
                """
                await conn.execute(query, name, kind.value, provider_key, tenant_id, is_granted)
        except Exception as e:
            logger.error(f"Failed to save grant {name} for {kind.value}:{provider_key}: {e}")
            raise StoreError(f"Failed to save permission grant: {e}") from e
    
    async def delete(
        self,
        name: str,
        provider_kind: ProviderKind,
        provider_key: str,
        tenant_id: Optional[str]
    ) -> None:
        kind = ProviderKind.parse(provider_kind)
        try:
            async with self._pool.acquire() as conn:
                query = f"""
                    DELETE FROM {self.schema}.permission_grants
                    WHERE name = $1 AND provider_kind = $2 AND provider_key = $3
                      AND tenant_id IS NOT DISTINCT FROM $4
                """
                await conn.execute(query, name, kind.value, provider_key, tenant_id)
        except Exception as e:
            logger.error(f"Failed to delete grant {name} for {kind.value}:{provider_key}: {e}")
            raise StoreError(f"Failed to delete permission grant: {e}") from e

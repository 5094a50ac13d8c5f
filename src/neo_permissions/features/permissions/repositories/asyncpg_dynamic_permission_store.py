"""AsyncPG-based store for dynamic permission records."""

import logging
from typing import List, Optional

import asyncpg

from ....core.exceptions import StoreError
from ..entities import DynamicPermissionRecord

logger = logging.getLogger(__name__)


DYNAMIC_PERMISSIONS_SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS {schema}.dynamic_permissions (
        id UUID PRIMARY KEY,
        name VARCHAR(128) NOT NULL,
        display_name VARCHAR(256) NOT NULL,
        parent_name VARCHAR(128),
        group_name VARCHAR(128) NOT NULL,
        is_granted_by_default BOOLEAN NOT NULL DEFAULT FALSE,
        description TEXT,
        tenant_id VARCHAR(64)
    );
    CREATE UNIQUE INDEX IF NOT EXISTS ux_dynamic_permissions_name
        ON {schema}.dynamic_permissions (name, tenant_id)
        NULLS NOT DISTINCT;
"""


class AsyncPGDynamicPermissionStore:
    """AsyncPG implementation of the DynamicPermissionStore protocol."""
    
    def __init__(self, pool: asyncpg.Pool, schema: str = "public"):
        self._pool = pool
        self.schema = schema
    
    def _build_record_from_row(self, row: asyncpg.Record) -> DynamicPermissionRecord:
        return DynamicPermissionRecord(
            id=row['id'],
            name=row['name'],
            display_name=row['display_name'],
            parent_name=row['parent_name'],
            group_name=row['group_name'],
            is_granted_by_default=row['is_granted_by_default'],
            description=row['description'],
            tenant_id=row['tenant_id'],
        )
    
    async def create_schema(self) -> None:
        try:
            async with self._pool.acquire() as conn:
                await conn.execute(DYNAMIC_PERMISSIONS_SCHEMA_SQL.format(schema=self.schema))
        except Exception as e:
            logger.error(f"Failed to create dynamic_permissions table in {self.schema}: {e}")
            raise StoreError(f"Failed to create dynamic permission schema: {e}") from e
    
    async def get_list(self, tenant_id: Optional[str]) -> List[DynamicPermissionRecord]:
        try:
            async with self._pool.acquire() as conn:
                query = f"""
                    SELECT id, name, display_name, parent_name, group_name,
                           is_granted_by_default, description, tenant_id
                    FROM {self.schema}.dynamic_permissions
                    WHERE tenant_id IS NOT DISTINCT FROM $1
                    ORDER BY name
                """
                rows = await conn.fetch(query, tenant_id)
        except Exception as e:
            logger.error(f"Failed to list dynamic permissions for tenant {tenant_id}: {e}")
            raise StoreError(f"Failed to list dynamic permissions: {e}") from e
        
        return [self._build_record_from_row(row) for row in rows]
    
    async def get(self, name: str, tenant_id: Optional[str]) -> Optional[DynamicPermissionRecord]:
        try:
            async with self._pool.acquire() as conn:
                query = f"""
                    SELECT id, name, display_name, parent_name, group_name,
                           is_granted_by_default, description, tenant_id
                    FROM {self.schema}.dynamic_permissions
                    WHERE name = $1 AND tenant_id IS NOT DISTINCT FROM $2
                """
                row = await conn.fetchrow(query, name, tenant_id)
        except Exception as e:
            logger.error(f"Failed to get dynamic permission {name}: {e}")
            raise StoreError(f"Failed to retrieve dynamic permission: {e}") from e
        
        return self._build_record_from_row(row) if row else None
    
    async def save(self, record: DynamicPermissionRecord) -> None:
        try:
            async with self._pool.acquire() as conn:
                query = f"""
                    INSERT INTO {self.schema}.dynamic_permissions
                        (id, name, display_name, parent_name, group_name,
                         is_granted_by_default, description, tenant_id)
                    VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                    ON CONFLICT (name, tenant_id)
                    DO UPDATE SET
                        display_name = EXCLUDED.display_name,
                        parent_name = EXCLUDED.parent_name,
                        group_name = EXCLUDED.group_name,
                        is_granted_by_default = EXCLUDED.is_granted_by_default,
                        description = EXCLUDED.description
                """
                await conn.execute(
                    query,
                    record.id,
                    record.name,
                    record.display_name,
                    record.parent_name,
                    record.group_name,
                    record.is_granted_by_default,
                    record.description,
                    record.tenant_id,
                )
        except Exception as e:
            logger.error(f"Failed to save dynamic permission {record.name}: {e}")
            raise StoreError(f"Failed to save dynamic permission: {e}") from e
    
    async def delete(self, name: str, tenant_id: Optional[str]) -> bool:
        try:
            async with self._pool.acquire() as conn:
                query = f"""
                    DELETE FROM {self.schema}.dynamic_permissions
                    WHERE name = $1 AND tenant_id IS NOT DISTINCT FROM $2
                """
                result = await conn.execute(query, name, tenant_id)
        except Exception as e:
            logger.error(f"Failed to delete dynamic permission {name}: {e}")
            raise StoreError(f"Failed to delete dynamic permission: {e}") from e
        
        # asyncpg returns a status tag such as "DELETE 1"
        return result.split()[-1] != "0"

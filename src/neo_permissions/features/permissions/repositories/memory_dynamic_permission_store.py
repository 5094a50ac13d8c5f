"""In-memory store for dynamic permission records."""

import asyncio
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from ..entities import DynamicPermissionRecord


class MemoryDynamicPermissionStore:
    """Dict-backed DynamicPermissionStore keyed by (name, tenant_id)."""
    
    def __init__(self):
        self._records: Dict[Tuple[str, Optional[str]], DynamicPermissionRecord] = {}
        self._lock = asyncio.Lock()
    
    async def get_list(self, tenant_id: Optional[str]) -> List[DynamicPermissionRecord]:
        return [
            replace(record) for (_, record_tenant), record in self._records.items()
            if record_tenant == tenant_id
        ]
    
    async def get(self, name: str, tenant_id: Optional[str]) -> Optional[DynamicPermissionRecord]:
        record = self._records.get((name, tenant_id))
        return replace(record) if record is not None else None
    
    async def save(self, record: DynamicPermissionRecord) -> None:
        async with self._lock:
            self._records[(record.name, record.tenant_id)] = replace(record)
    
    async def delete(self, name: str, tenant_id: Optional[str]) -> bool:
        async with self._lock:
            return self._records.pop((name, tenant_id), None) is not None

"""Environment-driven settings for the permission system."""

from enum import Enum
from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheBackend(str, Enum):
    """Cache backends available to the cached permission store."""
    MEMORY = "memory"
    REDIS = "redis"


class PermissionSettings(BaseSettings):
    """Permission system settings.
    
    Every field can be set through a ``NEO_PERMISSIONS_`` prefixed environment
    variable or a ``.env`` file. Complex fields (lists and dicts) are read as JSON.
    """
    
    model_config = SettingsConfigDict(
        env_prefix="NEO_PERMISSIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # Cache
    cache_enabled: bool = Field(default=True, description="Wrap the permission store with a read-through cache")
    cache_backend: CacheBackend = Field(default=CacheBackend.MEMORY, description="Cache backend to use")
    cache_ttl_seconds: int = Field(default=1800, ge=1, description="Time to live for cached grant lookups")
    cache_max_size: int = Field(default=10000, ge=1, description="Maximum entries for the in-memory cache")
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    
    # Database
    database_url: Optional[str] = Field(default=None, description="PostgreSQL DSN for the asyncpg stores")
    db_schema: str = Field(default="public", description="Schema holding the permission tables")
    db_pool_min_size: int = Field(default=1, ge=1)
    db_pool_max_size: int = Field(default=10, ge=1)
    
    # Integration
    tenant_header: str = Field(default="TenantId", description="Request header carrying the tenant id")
    policy_prefix: str = Field(default="Permission", description="Prefix of permission policy names")
    
    # Seeding
    default_roles: List[str] = Field(default_factory=list, description="Roles created at startup")
    role_permissions: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Permission names granted to each role at startup"
    )


@lru_cache()
def get_settings() -> PermissionSettings:
    """Get cached settings instance."""
    return PermissionSettings()

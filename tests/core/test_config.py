"""Tests for settings and logging configuration."""

from neo_permissions.config import CacheBackend, LoggingConfig, PermissionSettings


class TestPermissionSettings:
    
    def test_defaults(self, monkeypatch):
        for key in ("NEO_PERMISSIONS_CACHE_TTL_SECONDS", "NEO_PERMISSIONS_TENANT_HEADER"):
            monkeypatch.delenv(key, raising=False)
        
        settings = PermissionSettings(_env_file=None)
        
        assert settings.cache_enabled is True
        assert settings.cache_backend == CacheBackend.MEMORY
        assert settings.cache_ttl_seconds == 1800
        assert settings.tenant_header == "TenantId"
        assert settings.policy_prefix == "Permission"
    
    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("NEO_PERMISSIONS_CACHE_BACKEND", "redis")
        monkeypatch.setenv("NEO_PERMISSIONS_ROLE_PERMISSIONS", '{"Admin": ["UserManagement"]}')
        
        settings = PermissionSettings(_env_file=None)
        
        assert settings.cache_backend == CacheBackend.REDIS
        assert settings.role_permissions == {"Admin": ["UserManagement"]}


class TestLoggingConfig:
    
    def test_verbosity_overrides_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("LOG_VERBOSITY", "QUIET")
        
        config = LoggingConfig.build_config()
        
        assert config["root"]["level"] == "ERROR"
    
    def test_json_format(self, monkeypatch):
        monkeypatch.delenv("LOG_VERBOSITY", raising=False)
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        monkeypatch.setenv("LOG_FORMAT", "json")
        
        config = LoggingConfig.build_config()
        
        assert config["root"]["level"] == "INFO"
        assert config["formatters"]["default"]["format"].startswith('{"time"')

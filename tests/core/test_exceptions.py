"""Tests for the exception hierarchy and HTTP mapping."""

import pytest

from neo_permissions.api.exception_handlers import error_response_body
from neo_permissions.core.exceptions import (
    CacheError,
    ConflictError,
    DependencyError,
    NeoPermissionsError,
    PermissionNotFoundError,
    RegistryFrozenError,
    StoreError,
    ValidationError,
    get_http_status_code,
)


class TestExceptions:
    
    def test_error_code_defaults_to_class_name(self):
        error = PermissionNotFoundError("missing", details={"permission": "X"})
        
        assert error.error_code == "PermissionNotFoundError"
        assert error.details == {"permission": "X"}
        assert str(error) == "missing"
    
    @pytest.mark.parametrize("error,status", [
        (ValidationError("x"), 400),
        (PermissionNotFoundError("x"), 404),
        (ConflictError("x"), 409),
        (DependencyError("x"), 422),
        (RegistryFrozenError("x"), 500),
        (StoreError("x"), 503),
        (CacheError("x"), 503),
        (NeoPermissionsError("x"), 500),
    ])
    def test_http_status_mapping(self, error, status):
        assert get_http_status_code(error) == status
    
    def test_error_response_shape(self):
        response = error_response_body(ConflictError("dup", error_code="DUPLICATE"))
        
        assert response == {
            "error": {
                "code": "DUPLICATE",
                "message": "dup",
                "details": {},
                "type": "ConflictError",
            }
        }
    
    def test_repr_names_code(self):
        error = StoreError("connection lost", error_code="STORE_DOWN")
        
        assert repr(error) == "StoreError('connection lost', error_code='STORE_DOWN')"
        assert error.to_dict()["type"] == "StoreError"

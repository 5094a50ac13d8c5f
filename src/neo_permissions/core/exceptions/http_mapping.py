"""HTTP status code mapping for exceptions."""

from typing import Dict, Type

from .domain import (
    ValidationError,
    NotFoundError,
    PermissionNotFoundError,
    GroupNotFoundError,
    ConflictError,
    DependencyError,
    ConfigurationError,
    RegistryFrozenError,
    StoreError,
    CacheError,
)


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    ValidationError: 400,
    
    # 404 Not Found
    NotFoundError: 404,
    PermissionNotFoundError: 404,
    GroupNotFoundError: 404,
    
    # 409 Conflict
    ConflictError: 409,
    
    # 422 Unprocessable Entity
    DependencyError: 422,
    
    # 500 Internal Server Error
    ConfigurationError: 500,
    RegistryFrozenError: 500,
    
    # 503 Service Unavailable
    StoreError: 503,
    CacheError: 503,
}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for an exception.
    
    Exact type matches win; otherwise the closest mapped base class is used.
    Unmapped exceptions map to 500.
    """
    exception_type = type(exception)
    if exception_type in HTTP_STATUS_MAP:
        return HTTP_STATUS_MAP[exception_type]
    
    for klass in exception_type.__mro__[1:]:
        if klass in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[klass]
    
    return 500

"""Root of the neo-permissions exception hierarchy."""

from typing import Any, Dict, Optional


class NeoPermissionsError(Exception):
    """Base class for errors raised by the registry, checker, manager and stores.
    
    ``error_code`` defaults to the class name. ``details`` carries the names
    involved (permission, group, provider) for API responses and logs.
    """
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = details or {}
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": type(self).__name__,
        }
    
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, error_code={self.error_code!r})"

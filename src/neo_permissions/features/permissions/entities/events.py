"""Change notifications published by the permission manager."""

from dataclasses import dataclass
from typing import Optional

from .grant import ProviderKind


@dataclass(frozen=True)
class PermissionChangedEvent:
    name: str
    provider_kind: ProviderKind
    provider_key: str
    tenant_id: Optional[str] = None


@dataclass(frozen=True)
class PermissionGranted(PermissionChangedEvent):
    """A grant record was written with ``is_granted=True``."""
    pass


@dataclass(frozen=True)
class PermissionRevoked(PermissionChangedEvent):
    """A grant record was removed."""
    pass


@dataclass(frozen=True)
class PermissionProhibited(PermissionChangedEvent):
    """A grant record was written with ``is_granted=False``."""
    pass


PERMISSION_CHANGE_EVENTS = (PermissionGranted, PermissionRevoked, PermissionProhibited)

"""Grant records and the tri-state grant status."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any, Dict, Optional, Union
from uuid import UUID, uuid4

from ....core.exceptions import ValidationError


class GrantStatus(IntEnum):
    """Outcome of a single store lookup.
    
    The integer values double as the cache wire format.
    """
    GRANTED = 1
    PROHIBITED = 0
    UNDEFINED = -1


class ProviderKind(str, Enum):
    """Kind of subject a grant is attached to."""
    USER = "U"
    ROLE = "R"
    
    @classmethod
    def parse(cls, value: Union["ProviderKind", str, None]) -> "ProviderKind":
        """Coerce ``value`` into a ProviderKind or raise ValidationError."""
        if isinstance(value, cls):
            return value
        if value is None or not str(value).strip():
            raise ValidationError("Provider kind cannot be empty")
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValidationError(
                f"Unknown provider kind '{value}'",
                details={"provider_kind": value, "allowed": [kind.value for kind in cls]}
            )


def validate_provider_key(provider_key: Optional[str]) -> str:
    if provider_key is None or not str(provider_key).strip():
        raise ValidationError("Provider key cannot be empty")
    return str(provider_key)


def validate_permission_name(name: Optional[str]) -> str:
    if name is None or not str(name).strip():
        raise ValidationError("Permission name cannot be empty")
    return name


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PermissionGrant:
    """A persisted grant or prohibition of one permission for one subject."""
    
    name: str
    provider_kind: ProviderKind
    provider_key: str
    is_granted: bool = True
    tenant_id: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    creation_time: datetime = field(default_factory=utc_now)
    
    def __post_init__(self):
        self.provider_kind = ProviderKind.parse(self.provider_kind)
    
    @property
    def status(self) -> GrantStatus:
        return GrantStatus.GRANTED if self.is_granted else GrantStatus.PROHIBITED
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "provider_kind": self.provider_kind.value,
            "provider_key": self.provider_key,
            "is_granted": self.is_granted,
            "tenant_id": self.tenant_id,
            "creation_time": self.creation_time.isoformat(),
        }
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PermissionGrant":
        return cls(
            id=UUID(data["id"]),
            name=data["name"],
            provider_kind=ProviderKind(data["provider_kind"]),
            provider_key=data["provider_key"],
            is_granted=bool(data["is_granted"]),
            tenant_id=data.get("tenant_id"),
            creation_time=datetime.fromisoformat(data["creation_time"]),
        )

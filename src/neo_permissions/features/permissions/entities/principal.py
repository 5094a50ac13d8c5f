"""The subject whose permissions are being checked."""

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Principal:
    """Identity, authentication state and ordered role names of a caller.
    
    How the identity is established is up to the application; this package
    only consumes it.
    """
    
    id: Optional[str]
    is_authenticated: bool = True
    roles: Tuple[str, ...] = field(default_factory=tuple)
    
    def __post_init__(self):
        # Accept any iterable of roles but store it immutably.
        object.__setattr__(self, "roles", tuple(self.roles or ()))
    
    @classmethod
    def anonymous(cls) -> "Principal":
        return cls(id=None, is_authenticated=False)
    
    @classmethod
    def from_claims(
        cls,
        claims: Mapping[str, Any],
        id_claim: str = "sub",
        roles_claim: str = "roles",
    ) -> "Principal":
        """Build a principal from already-verified token claims."""
        user_id = claims.get(id_claim)
        roles = claims.get(roles_claim) or ()
        if isinstance(roles, str):
            roles = (roles,)
        return cls(id=user_id, is_authenticated=bool(user_id), roles=tuple(roles))
    
    def with_roles(self, roles: Iterable[str]) -> "Principal":
        return Principal(id=self.id, is_authenticated=self.is_authenticated, roles=tuple(roles))

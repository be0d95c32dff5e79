from dataclasses import dataclass, field
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class Principal:
    """The acting user of a request, as far as authorization is concerned."""

    user_id: Optional[str]
    user_name: Optional[str] = None
    roles: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def is_in_role(self, role: str) -> bool:
        return role.lower() in {r.lower() for r in self.roles}

    @classmethod
    def from_claims(cls, identity, claims) -> "Principal":
        return cls(
            user_id=identity,
            user_name=claims.get("user_name"),
            roles=frozenset(claims.get("roles") or ()),
        )


ANONYMOUS = Principal(user_id=None)

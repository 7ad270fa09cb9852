from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.enums import Role, SessionState


@dataclass(frozen=True)
class Identity:
    """The authenticated user as cached by the client.

    ``raw`` keeps the backend object untouched so it can be persisted and
    restored exactly; ``role`` is already normalized.
    """

    id: Optional[str]
    name: Optional[str]
    email: Optional[str]
    role: Optional[Role]
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_payload(cls, payload: Any, *, email: Optional[str] = None) -> "Identity":
        data = dict(payload) if isinstance(payload, dict) else {}
        if email and not data.get("email"):
            data["email"] = email
        ident = data.get("id") if data.get("id") is not None else data.get("_id")
        return cls(
            id=str(ident) if ident is not None else None,
            name=data.get("name"),
            email=data.get("email"),
            role=Role.normalize(data.get("role")),
            raw=data,
        )

    def has_role(self, *roles: Role) -> bool:
        return self.role is not None and self.role in roles

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value if self.role else None,
        }


@dataclass(frozen=True)
class Session:
    """Immutable snapshot of the session store, handed to observers and the route guard."""

    state: SessionState = SessionState.UNRESOLVED
    identity: Optional[Identity] = None
    token: Optional[str] = field(default=None, repr=False)

    @property
    def resolved(self) -> bool:
        return self.state != SessionState.UNRESOLVED

    @property
    def authenticated(self) -> bool:
        return self.state == SessionState.AUTHENTICATED and self.identity is not None

    @property
    def role(self) -> Optional[Role]:
        return self.identity.role if self.identity else None

import uuid
from dataclasses import dataclass
from typing import Any

from app.models.enums import Role

@dataclass(frozen=True)
class Principal:
    """The authenticated identity attached to a single request."""

    user_id: uuid.UUID
    email: str
    role: Role | None
    org_id: uuid.UUID | None = None

    @property
    def is_viewer(self) -> bool:
        return self.role == Role.viewer

def principal_from_claims(claims: dict[str, Any]) -> Principal:
    # payload is trusted verbatim once the token verified
    role = claims.get("role")
    org_id = claims.get("org_id")
    return Principal(
        user_id=uuid.UUID(claims["sub"]),
        email=claims.get("email", ""),
        role=Role(role) if role else None,
        org_id=uuid.UUID(org_id) if org_id else None,
    )

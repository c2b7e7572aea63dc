from dataclasses import dataclass
from typing import Optional

from flask_jwt_extended import get_jwt, get_jwt_identity


@dataclass(frozen=True)
class AdminSession:
    """Identity of the admin performing an operation."""
    user_id: str
    email: Optional[str] = None
    role: str = "admin"

    @property
    def actor(self) -> str:
        return self.email or self.user_id

    @classmethod
    def from_user(cls, user):
        return cls(user_id=user.id, email=user.email, role=user.role)

    @classmethod
    def from_jwt(cls):
        """Builds the session from the verified token of the current request."""
        claims = get_jwt()
        return cls(
            user_id=get_jwt_identity(),
            email=claims.get("email"),
            role=claims.get("role", "admin"),
        )


def actor_id(session: Optional[AdminSession]) -> Optional[str]:
    return session.actor if session else None

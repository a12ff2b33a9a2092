"""User model re-export plus the public projection returned to clients."""

from __future__ import annotations

from pydantic import BaseModel

from database.models import User


class UserOut(BaseModel):
    """User fields safe to send to a client (never the password hash)."""

    id: str
    username: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(id=str(user.id), username=user.username, email=user.email)


__all__ = ["User", "UserOut"]

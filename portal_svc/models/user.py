"""
Domain models for signed-in users and their sessions.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SessionUser:
    """
    The identity a request acts on behalf of.

    Resolved from the bearer token by core.auth.get_current_user and passed
    explicitly into every service call that reads or writes user data.
    """

    id: str
    email: str
    full_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionUser":
        return cls(
            id=str(data["id"]),
            email=data.get("email") or "",
            full_name=data.get("full_name"),
        )


@dataclass(frozen=True)
class AuthSession:
    """An issued session: opaque access token plus its user."""

    access_token: str
    user: SessionUser
    token_type: str = field(default="bearer")

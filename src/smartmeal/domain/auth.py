"""Authentication session models."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class AuthUser:
    """Identity returned by the hosted auth service."""

    id: UUID
    email: str
    display_name: str | None


@dataclass(frozen=True)
class AuthSession:
    """Signed-in user with the tokens issued for it."""

    user: AuthUser
    access_token: str | None
    refresh_token: str | None

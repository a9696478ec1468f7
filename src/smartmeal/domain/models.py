"""Domain models for SmartMeal users."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

ROLE_USER = "user"
ROLE_ADMIN = "admin"


@dataclass(frozen=True)
class UserProfile:
    """Profile document stored for each authenticated identity."""

    id: UUID
    email: str
    first_name: str | None = None
    last_name: str | None = None
    age: int | None = None
    gender: str | None = None
    diet_preference: str | None = None
    household_size: int = 1
    is_setup_complete: bool = False
    role: str = ROLE_USER
    favorite_market_ids: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def display_name(self) -> str:
        """Full name when known, otherwise the e-mail address."""
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) if parts else self.email

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

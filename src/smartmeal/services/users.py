"""User profile and setup wizard logic."""

from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from smartmeal.domain.auth import AuthUser
from smartmeal.domain.models import ROLE_ADMIN, ROLE_USER, UserProfile
from smartmeal.errors import NotFoundError, ValidationError

GENDERS = ("male", "female", "other")
DIET_PREFERENCES = (
    "standard",
    "vegetarian",
    "vegan",
    "halal",
    "gluten_free",
    "sport",
)
MAX_AGE = 120
MAX_HOUSEHOLD_SIZE = 20


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for an auth user id, if present."""

    def create_profile(self, profile: UserProfile) -> UserProfile:
        """Create and return a profile document."""

    def update_profile(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        """Merge fields into a profile and return it."""

    def list_profiles(self) -> list[UserProfile]:
        """Return all profiles."""

    def delete_profile(self, user_id: UUID) -> None:
        """Delete a profile."""


@dataclass
class UserService:
    """Application service for profile lifecycle actions."""

    repository: UserRepository
    admin_emails: set[str] = field(default_factory=set)

    def ensure_profile(self, auth_user: AuthUser) -> UserProfile:
        """Return the user's profile, creating it on first access."""
        existing = self.repository.get_profile(auth_user.id)
        if existing:
            return existing
        first_name, last_name = _split_display_name(auth_user.display_name)
        role = ROLE_ADMIN if auth_user.email.lower() in self.admin_emails else ROLE_USER
        return self.repository.create_profile(
            UserProfile(
                id=auth_user.id,
                email=auth_user.email,
                first_name=first_name,
                last_name=last_name,
                role=role,
            )
        )

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return a profile or raise when it does not exist."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise NotFoundError(f"User {user_id} not found")
        return profile

    def update_profile(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        """Merge the provided fields into the profile, checking wizard rules."""
        self.get_profile(user_id)
        updates = _clean_profile_fields(
            {key: value for key, value in payload.items() if value is not None}
        )
        return self.repository.update_profile(user_id, updates)

    def delete_profile(self, user_id: UUID) -> None:
        """Remove a profile document."""
        self.get_profile(user_id)
        self.repository.delete_profile(user_id)

    def complete_setup(  # noqa: PLR0913
        self,
        user_id: UUID,
        *,
        first_name: str,
        last_name: str,
        age: int,
        gender: str,
        diet_preference: str,
        household_size: int,
    ) -> UserProfile:
        """Validate the setup wizard answers and mark the profile complete."""
        return self.update_profile(
            user_id,
            {
                "first_name": first_name,
                "last_name": last_name,
                "age": age,
                "gender": gender,
                "diet_preference": diet_preference,
                "household_size": household_size,
                "is_setup_complete": True,
            },
        )

    def toggle_favorite_market(self, user_id: UUID, market_id: str) -> UserProfile:
        """Add or remove a market from the user's favorites."""
        profile = self.get_profile(user_id)
        favorites = list(profile.favorite_market_ids)
        if market_id in favorites:
            favorites.remove(market_id)
        else:
            favorites.append(market_id)
        return self.repository.update_profile(
            user_id, {"favorite_market_ids": favorites}
        )

    def list_profiles(self) -> list[UserProfile]:
        """Return every profile."""
        return self.repository.list_profiles()


def _split_display_name(display_name: str | None) -> tuple[str | None, str | None]:
    if not display_name:
        return None, None
    first, _, last = display_name.strip().partition(" ")
    return first or None, last.strip() or None


def _clean_profile_fields(updates: dict[str, object]) -> dict[str, object]:
    cleaned = dict(updates)
    for key in ("first_name", "last_name"):
        if key in cleaned:
            cleaned[key] = str(cleaned[key]).strip()
            if not cleaned[key]:
                raise ValidationError("First and last name are required")
    if "age" in cleaned and not 1 <= int(cleaned["age"]) <= MAX_AGE:
        raise ValidationError(f"Age must be between 1 and {MAX_AGE}")
    gender = cleaned.get("gender")
    if gender is not None and gender not in GENDERS:
        raise ValidationError(f"Unknown gender: {gender}")
    diet = cleaned.get("diet_preference")
    if diet is not None and diet not in DIET_PREFERENCES:
        raise ValidationError(f"Unknown diet preference: {diet}")
    size = cleaned.get("household_size")
    if size is not None and not 1 <= int(size) <= MAX_HOUSEHOLD_SIZE:
        raise ValidationError(
            f"Household size must be between 1 and {MAX_HOUSEHOLD_SIZE}"
        )
    return cleaned

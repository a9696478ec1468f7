"""Supabase-backed user profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from smartmeal.domain.models import ROLE_USER, UserProfile
from smartmeal.errors import RepositoryError
from smartmeal.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for an auth user id, if present."""
        response = (
            self.client.table("users")
            .select("*")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_profile(response.data[0])

    def create_profile(self, profile: UserProfile) -> UserProfile:
        """Insert a new profile row and return it."""
        now = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("users")
            .insert(
                {
                    "id": str(profile.id),
                    "email": profile.email,
                    "first_name": profile.first_name,
                    "last_name": profile.last_name,
                    "household_size": profile.household_size,
                    "is_setup_complete": profile.is_setup_complete,
                    "role": profile.role,
                    "favorite_market_ids": profile.favorite_market_ids,
                    "created_at": now,
                }
            )
            .execute()
        )
        if not response.data:
            raise RepositoryError("Failed to create user profile")
        return parse_profile(response.data[0])

    def update_profile(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        """Merge fields into a profile and stamp updated_at."""
        response = (
            self.client.table("users")
            .update({**payload, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RepositoryError("Failed to update user profile")
        return parse_profile(response.data[0])

    def list_profiles(self) -> list[UserProfile]:
        """Return all profiles, newest first."""
        response = (
            self.client.table("users")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [parse_profile(row) for row in response.data or []]

    def delete_profile(self, user_id: UUID) -> None:
        """Delete a profile row."""
        self.client.table("users").delete().eq("id", str(user_id)).execute()


def parse_profile(row: dict[str, object]) -> UserProfile:
    """Parse a users row into a domain model."""
    return UserProfile(
        id=UUID(str(row["id"])),
        email=str(row.get("email") or ""),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        age=int(row["age"]) if row.get("age") is not None else None,
        gender=row.get("gender"),
        diet_preference=row.get("diet_preference"),
        household_size=int(row.get("household_size") or 1),
        is_setup_complete=bool(row.get("is_setup_complete", False)),
        role=str(row.get("role") or ROLE_USER),
        favorite_market_ids=[
            str(value) for value in row.get("favorite_market_ids") or []
        ],
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None

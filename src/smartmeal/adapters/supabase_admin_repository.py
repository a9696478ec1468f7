"""Supabase admin data access."""

from dataclasses import dataclass

from supabase import Client

from smartmeal.adapters.supabase_user_repository import parse_profile
from smartmeal.domain.models import UserProfile
from smartmeal.services.admin import AdminRepository


@dataclass
class SupabaseAdminRepository(AdminRepository):
    """Supabase implementation for admin queries."""

    client: Client

    def count_users(self) -> int:
        """Return the number of user profiles."""
        return self._count("users")

    def count_approved_dishes(self) -> int:
        """Return the number of approved dishes."""
        response = (
            self.client.table("dishes")
            .select("id", count="exact")
            .eq("approved", True)
            .execute()
        )
        return response.count or 0

    def count_meal_plans(self) -> int:
        """Return the number of stored day plans."""
        return self._count("mealPlans")

    def count_shopping_lists(self) -> int:
        """Return the number of shopping lists."""
        return self._count("shoppingLists")

    def list_users(self) -> list[UserProfile]:
        """Return every profile, newest first."""
        response = (
            self.client.table("users")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [parse_profile(row) for row in response.data or []]

    def _count(self, table: str) -> int:
        response = self.client.table(table).select("id", count="exact").execute()
        return response.count or 0

"""Supabase implementation for the ingredient catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from smartmeal.domain.ingredients import Ingredient
from smartmeal.errors import RepositoryError
from smartmeal.services.ingredients import IngredientRepository


@dataclass
class SupabaseIngredientRepository(IngredientRepository):
    """Supabase-backed repository for ingredients."""

    client: Client

    def create_ingredient(self, payload: dict[str, object]) -> Ingredient:
        """Create an ingredient and return it."""
        response = self.client.table("ingredients").insert(payload).execute()
        if not response.data:
            raise RepositoryError("Failed to create ingredient")
        return parse_ingredient(response.data[0])

    def update_ingredient(
        self, ingredient_id: UUID, payload: dict[str, object]
    ) -> Ingredient:
        """Update an ingredient and return it."""
        response = (
            self.client.table("ingredients")
            .update(payload)
            .eq("id", str(ingredient_id))
            .execute()
        )
        if not response.data:
            raise RepositoryError("Failed to update ingredient")
        return parse_ingredient(response.data[0])

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        """Return an ingredient by id, if present."""
        response = (
            self.client.table("ingredients")
            .select("*")
            .eq("id", str(ingredient_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_ingredient(response.data[0])

    def list_ingredients(self) -> list[Ingredient]:
        """Return ingredients ordered by name."""
        response = self.client.table("ingredients").select("*").order("name").execute()
        return [parse_ingredient(row) for row in response.data or []]

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        """Delete an ingredient."""
        self.client.table("ingredients").delete().eq("id", str(ingredient_id)).execute()


def parse_ingredient(row: dict[str, object]) -> Ingredient:
    """Parse an ingredients row into a domain model."""
    return Ingredient(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        category=str(row.get("category") or ""),
        unit=str(row.get("unit") or ""),
        stock=float(row.get("stock") or 0.0),
        min_stock=float(row.get("min_stock") or 0.0),
        cost=float(row.get("cost") or 0.0),
        image_url=row.get("image_url"),
    )

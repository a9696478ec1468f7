"""Supabase implementation for dishes."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from smartmeal.domain.dishes import Dish, DishIngredient, NutritionFacts
from smartmeal.errors import RepositoryError
from smartmeal.services.dishes import DishRepository


@dataclass
class SupabaseDishRepository(DishRepository):
    """Supabase-backed repository for dishes."""

    client: Client

    def create_dish(self, owner_id: UUID | None, payload: dict[str, object]) -> Dish:
        """Create a dish and return it."""
        owner = str(owner_id) if owner_id else None
        response = (
            self.client.table("dishes")
            .insert({"owner_id": owner, **payload})
            .execute()
        )
        if not response.data:
            raise RepositoryError("Failed to create dish")
        return parse_dish(response.data[0])

    def update_dish(self, dish_id: UUID, payload: dict[str, object]) -> Dish:
        """Update a dish and return it."""
        response = (
            self.client.table("dishes")
            .update(payload)
            .eq("id", str(dish_id))
            .execute()
        )
        if not response.data:
            raise RepositoryError("Failed to update dish")
        return parse_dish(response.data[0])

    def get_dish(self, dish_id: UUID) -> Dish | None:
        """Return a dish by id, if present."""
        response = (
            self.client.table("dishes")
            .select("*")
            .eq("id", str(dish_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_dish(response.data[0])

    def list_dishes(self) -> list[Dish]:
        """Return all dishes ordered by name."""
        response = self.client.table("dishes").select("*").order("name").execute()
        return [parse_dish(row) for row in response.data or []]

    def delete_dish(self, dish_id: UUID) -> None:
        """Delete a dish."""
        self.client.table("dishes").delete().eq("id", str(dish_id)).execute()


def parse_dish(row: dict[str, object]) -> Dish:
    """Parse a dishes row into a domain model."""
    nutrition = row.get("nutrition") or {}
    created_raw = row.get("created_at")
    owner_raw = row.get("owner_id")
    return Dish(
        id=UUID(str(row["id"])),
        owner_id=UUID(str(owner_raw)) if owner_raw else None,
        name=str(row.get("name", "")),
        description=str(row.get("description") or ""),
        category=str(row.get("category", "")),
        cooking_time_min=int(row.get("cooking_time_min") or 0),
        servings=int(row.get("servings") or 1),
        difficulty=str(row.get("difficulty") or "medium"),
        image_url=row.get("image_url"),
        is_favorite=bool(row.get("is_favorite", False)),
        is_vegetarian=bool(row.get("is_vegetarian", False)),
        is_halal=bool(row.get("is_halal", False)),
        is_gluten_free=bool(row.get("is_gluten_free", False)),
        is_sport_friendly=bool(row.get("is_sport_friendly", False)),
        ingredients=[
            DishIngredient(
                name=str(line.get("name", "")),
                quantity=float(line.get("quantity") or 0.0),
                unit=str(line.get("unit") or ""),
            )
            for line in row.get("ingredients") or []
        ],
        instructions=[str(step) for step in row.get("instructions") or []],
        nutrition=NutritionFacts(
            calories=float(nutrition.get("calories") or 0.0),
            protein_g=float(nutrition.get("protein_g") or 0.0),
            carbs_g=float(nutrition.get("carbs_g") or 0.0),
            fat_g=float(nutrition.get("fat_g") or 0.0),
        ),
        approved=bool(row.get("approved", False)),
        created_at=(
            date.fromisoformat(created_raw[:10])
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )

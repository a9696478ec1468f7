"""Supabase implementation for per-day meal plans."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from smartmeal.domain.planning import MEAL_SLOTS, MealPlan, PlannedDish
from smartmeal.errors import RepositoryError
from smartmeal.services.planning import MealPlanRepository


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase-backed repository keyed by user and date."""

    client: Client

    def get_plan(self, user_id: UUID, day: date) -> MealPlan | None:
        """Return the plan for one day, if present."""
        response = (
            self.client.table("mealPlans")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def list_plans(self, user_id: UUID, start: date, end: date) -> list[MealPlan]:
        """Return plans dated within [start, end]."""
        response = (
            self.client.table("mealPlans")
            .select("*")
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date")
            .execute()
        )
        return [_parse_plan(row) for row in response.data or []]

    def set_slot(
        self, user_id: UUID, day: date, slot: str, dish: PlannedDish
    ) -> MealPlan:
        """Write one slot, keeping the other slots of the day."""
        exists = self.get_plan(user_id, day) is not None
        return self._write(user_id, day, {slot: _serialize_dish(dish)}, exists=exists)

    def clear_slot(self, user_id: UUID, day: date, slot: str) -> MealPlan | None:
        """Remove one slot, keeping the other slots of the day."""
        if self.get_plan(user_id, day) is None:
            return None
        return self._write(user_id, day, {slot: None}, exists=True)

    def count_plans(self) -> int:
        """Return the number of stored day plans."""
        response = self.client.table("mealPlans").select("id", count="exact").execute()
        return response.count or 0

    def list_all(
        self, start: date, end: date, user_id: UUID | None = None
    ) -> list[MealPlan]:
        """Return plans of every user dated within [start, end], newest first."""
        query = (
            self.client.table("mealPlans")
            .select("*")
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
        )
        if user_id is not None:
            query = query.eq("user_id", str(user_id))
        response = query.order("date", desc=True).execute()
        return [_parse_plan(row) for row in response.data or []]

    def delete_plan(self, user_id: UUID, day: date) -> None:
        """Delete the plan for one day."""
        (
            self.client.table("mealPlans")
            .delete()
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .execute()
        )

    def _write(
        self, user_id: UUID, day: date, payload: dict[str, object], *, exists: bool
    ) -> MealPlan:
        if not exists:
            query = self.client.table("mealPlans").insert(
                {"user_id": str(user_id), "date": day.isoformat(), **payload}
            )
        else:
            query = (
                self.client.table("mealPlans")
                .update(payload)
                .eq("user_id", str(user_id))
                .eq("date", day.isoformat())
            )
        response = query.execute()
        if not response.data:
            raise RepositoryError("Failed to save meal plan")
        return _parse_plan(response.data[0])


def _serialize_dish(dish: PlannedDish) -> dict[str, object]:
    return {
        "dish_id": str(dish.dish_id),
        "name": dish.name,
        "category": dish.category,
        "cooking_time_min": dish.cooking_time_min,
        "servings": dish.servings,
        "calories": dish.calories,
        "is_vegetarian": dish.is_vegetarian,
        "is_halal": dish.is_halal,
        "is_gluten_free": dish.is_gluten_free,
        "is_sport_friendly": dish.is_sport_friendly,
    }


def _parse_dish(raw: object) -> PlannedDish | None:
    if not isinstance(raw, dict) or not raw.get("dish_id"):
        return None
    return PlannedDish(
        dish_id=UUID(str(raw["dish_id"])),
        name=str(raw.get("name", "")),
        category=str(raw.get("category", "")),
        cooking_time_min=int(raw.get("cooking_time_min") or 0),
        servings=int(raw.get("servings") or 1),
        calories=float(raw.get("calories") or 0.0),
        is_vegetarian=bool(raw.get("is_vegetarian", False)),
        is_halal=bool(raw.get("is_halal", False)),
        is_gluten_free=bool(raw.get("is_gluten_free", False)),
        is_sport_friendly=bool(raw.get("is_sport_friendly", False)),
    )


def _parse_plan(row: dict[str, object]) -> MealPlan:
    slots = {slot: _parse_dish(row.get(slot)) for slot in MEAL_SLOTS}
    return MealPlan(
        user_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["date"])[:10]),
        **slots,
    )

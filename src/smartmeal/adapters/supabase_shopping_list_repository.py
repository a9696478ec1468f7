"""Supabase implementation for shopping lists."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from smartmeal.domain.shopping import DEFAULT_CATEGORY, ShoppingItem, ShoppingList
from smartmeal.errors import RepositoryError
from smartmeal.services.shopping import ShoppingListRepository


@dataclass
class SupabaseShoppingListRepository(ShoppingListRepository):
    """Supabase-backed repository for shopping lists."""

    client: Client

    def create_list(self, user_id: UUID, payload: dict[str, object]) -> ShoppingList:
        """Create a list and return it."""
        response = (
            self.client.table("shoppingLists")
            .insert(
                {
                    "user_id": str(user_id),
                    "generated_at": datetime.now(tz=UTC).isoformat(),
                    **payload,
                }
            )
            .execute()
        )
        if not response.data:
            raise RepositoryError("Failed to create shopping list")
        return parse_shopping_list(response.data[0])

    def get_list(self, list_id: UUID) -> ShoppingList | None:
        """Return a list by id, if present."""
        response = (
            self.client.table("shoppingLists")
            .select("*")
            .eq("id", str(list_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_shopping_list(response.data[0])

    def list_for_user(self, user_id: UUID) -> list[ShoppingList]:
        """Return a user's lists, newest first."""
        response = (
            self.client.table("shoppingLists")
            .select("*")
            .eq("user_id", str(user_id))
            .order("generated_at", desc=True)
            .execute()
        )
        return [parse_shopping_list(row) for row in response.data or []]

    def list_all(self, status: str | None = None) -> list[ShoppingList]:
        """Return every list, newest week first, optionally by status."""
        query = self.client.table("shoppingLists").select("*")
        if status:
            query = query.eq("status", status)
        response = query.order("start_date", desc=True).execute()
        return [parse_shopping_list(row) for row in response.data or []]

    def update_list(self, list_id: UUID, payload: dict[str, object]) -> ShoppingList:
        """Update list fields and return the list."""
        response = (
            self.client.table("shoppingLists")
            .update(payload)
            .eq("id", str(list_id))
            .execute()
        )
        if not response.data:
            raise RepositoryError("Failed to update shopping list")
        return parse_shopping_list(response.data[0])

    def delete_list(self, list_id: UUID) -> None:
        """Delete a list."""
        self.client.table("shoppingLists").delete().eq("id", str(list_id)).execute()


def parse_shopping_list(row: dict[str, object]) -> ShoppingList:
    """Parse a shoppingLists row; a non-list items field reads as empty."""
    raw_items = row.get("items")
    generated = row.get("generated_at")
    actual = row.get("actual_cost")
    return ShoppingList(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        start_date=_parse_date(row.get("start_date")),
        end_date=_parse_date(row.get("end_date")),
        household_size=int(row.get("household_size") or 1),
        estimated_budget=float(row.get("estimated_budget") or 0.0),
        estimated_time_min=int(row.get("estimated_time_min") or 0),
        items=[
            _parse_item(item)
            for item in (raw_items if isinstance(raw_items, list) else [])
            if isinstance(item, dict)
        ],
        status=str(row.get("status") or "generated"),
        actual_cost=float(actual) if actual is not None else None,
        generated_at=(
            datetime.fromisoformat(generated)
            if isinstance(generated, str) and generated
            else None
        ),
    )


def _parse_item(raw: dict[str, object]) -> ShoppingItem:
    ingredient_id = raw.get("ingredient_id")
    return ShoppingItem(
        id=str(raw.get("id", "")),
        name=str(raw.get("name", "")),
        quantity=float(raw.get("quantity") or 0.0),
        unit=str(raw.get("unit") or ""),
        category=str(raw.get("category") or DEFAULT_CATEGORY),
        estimated_price=float(raw.get("estimated_price") or 0.0),
        purchased=bool(raw.get("purchased", False)),
        ingredient_id=UUID(str(ingredient_id)) if ingredient_id else None,
    )


def _parse_date(raw: object) -> date | None:
    if isinstance(raw, str) and raw:
        return date.fromisoformat(raw[:10])
    return None

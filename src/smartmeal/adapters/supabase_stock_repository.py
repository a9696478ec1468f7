"""Supabase implementation for stock items."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from smartmeal.domain.stock import StockItem
from smartmeal.errors import RepositoryError
from smartmeal.services.stock import StockRepository

# Derived on read, never persisted.
_DERIVED_FIELDS = ("status", "stock_value")


@dataclass
class SupabaseStockRepository(StockRepository):
    """Supabase-backed repository for stock items."""

    client: Client

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> StockItem:
        """Create a stock item and return it."""
        response = (
            self.client.table("stockItems")
            .insert({"user_id": str(user_id), **_stored(payload)})
            .execute()
        )
        if not response.data:
            raise RepositoryError("Failed to create stock item")
        return parse_stock_item(response.data[0])

    def update_item(self, item_id: UUID, payload: dict[str, object]) -> StockItem:
        """Update a stock item and return it."""
        response = (
            self.client.table("stockItems")
            .update(_stored(payload))
            .eq("id", str(item_id))
            .execute()
        )
        if not response.data:
            raise RepositoryError("Failed to update stock item")
        return parse_stock_item(response.data[0])

    def get_item(self, item_id: UUID) -> StockItem | None:
        """Return a stock item by id, if present."""
        response = (
            self.client.table("stockItems")
            .select("*")
            .eq("id", str(item_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_stock_item(response.data[0])

    def list_items(self, user_id: UUID | None) -> list[StockItem]:
        """Return a user's items, or every item when user_id is None."""
        query = self.client.table("stockItems").select("*")
        if user_id is not None:
            query = query.eq("user_id", str(user_id))
        response = query.order("name").execute()
        return [parse_stock_item(row) for row in response.data or []]

    def delete_item(self, item_id: UUID) -> None:
        """Delete a stock item."""
        self.client.table("stockItems").delete().eq("id", str(item_id)).execute()


def _stored(payload: dict[str, object]) -> dict[str, object]:
    return {key: value for key, value in payload.items() if key not in _DERIVED_FIELDS}


def parse_stock_item(row: dict[str, object]) -> StockItem:
    """Parse a stockItems row; status and value are recomputed."""
    user_raw = row.get("user_id")
    return StockItem(
        id=UUID(str(row["id"])),
        user_id=UUID(str(user_raw)) if user_raw else None,
        name=str(row.get("name", "")),
        category=str(row.get("category") or ""),
        current_stock=float(row.get("current_stock") or 0.0),
        min_stock=float(row.get("min_stock") or 0.0),
        max_stock=float(row.get("max_stock") or 0.0),
        unit=str(row.get("unit") or ""),
        cost=float(row.get("cost") or 0.0),
        supplier=row.get("supplier"),
        last_restocked=_parse_date(row.get("last_restocked")),
        weekly_consumption=float(row.get("weekly_consumption") or 0.0),
        monthly_consumption=float(row.get("monthly_consumption") or 0.0),
        expiration_date=_parse_date(row.get("expiration_date")),
    )


def _parse_date(raw: object) -> date | None:
    if isinstance(raw, str) and raw:
        return date.fromisoformat(raw[:10])
    return None

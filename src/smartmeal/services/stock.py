"""Stock tracking, alerts and restocking."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from smartmeal.domain.activity import STOCK_ADDED
from smartmeal.domain.stock import (
    STOCK_STATUSES,
    RestockOrder,
    StockItem,
    StockoutPrediction,
    StockStats,
)
from smartmeal.errors import NotFoundError, ValidationError
from smartmeal.services.activity import ActivityService

_logger = logging.getLogger(__name__)

SORT_KEYS = ("name", "stock", "consumption", "value")


class StockRepository(Protocol):
    """Persistence interface for stock items."""

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> StockItem:
        """Create a stock item and return it."""

    def update_item(self, item_id: UUID, payload: dict[str, object]) -> StockItem:
        """Update a stock item and return it."""

    def get_item(self, item_id: UUID) -> StockItem | None:
        """Return a stock item by id, if present."""

    def list_items(self, user_id: UUID | None) -> list[StockItem]:
        """Return a user's items, or every item when user_id is None."""

    def delete_item(self, item_id: UUID) -> None:
        """Delete a stock item."""


@dataclass
class StockService:
    """Application service for the stock tracker."""

    repository: StockRepository
    activity_service: ActivityService
    expiry_alert_days: int = 3
    stockout_window_days: int = 7

    def list_items(
        self,
        user_id: UUID | None,
        category: str | None = None,
        status: str | None = None,
        sort_by: str = "name",
    ) -> list[StockItem]:
        """Return items filtered by category and status, then sorted."""
        if status and status not in STOCK_STATUSES:
            raise ValidationError(f"Unknown stock status: {status}")
        if sort_by not in SORT_KEYS:
            raise ValidationError(f"Unknown sort key: {sort_by}")
        items = [
            item
            for item in self.repository.list_items(user_id)
            if (not category or item.category == category)
            and (not status or item.status == status)
        ]
        return _sort(items, sort_by)

    def categories(self, user_id: UUID | None) -> list[str]:
        """Return the distinct categories in first-seen order."""
        seen: dict[str, None] = {}
        for item in self.repository.list_items(user_id):
            seen.setdefault(item.category, None)
        return list(seen)

    def get_item(self, item_id: UUID) -> StockItem:
        """Return an item or raise when missing."""
        item = self.repository.get_item(item_id)
        if item is None:
            raise NotFoundError(f"Stock item {item_id} not found")
        return item

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> StockItem:
        """Create a stock item."""
        _check_thresholds(payload)
        return self.repository.create_item(user_id, payload)

    def update_item(self, item_id: UUID, payload: dict[str, object]) -> StockItem:
        """Update a stock item."""
        self.get_item(item_id)
        _check_thresholds(payload)
        return self.repository.update_item(item_id, payload)

    def delete_item(self, item_id: UUID) -> None:
        """Delete a stock item."""
        self.get_item(item_id)
        self.repository.delete_item(item_id)

    def stats(self, user_id: UUID | None) -> StockStats:
        """Return counts by status and value totals."""
        items = self.repository.list_items(user_id)
        return StockStats(
            total_items=len(items),
            critical_items=sum(1 for item in items if item.status == "critical"),
            low_stock_items=sum(1 for item in items if item.status == "low"),
            overstocked_items=sum(1 for item in items if item.status == "overstocked"),
            total_value=round(sum(item.stock_value for item in items), 2),
            weekly_consumption_cost=round(
                sum(item.weekly_consumption * item.cost for item in items), 2
            ),
            monthly_consumption_cost=round(
                sum(item.monthly_consumption * item.cost for item in items), 2
            ),
        )

    def alerts(
        self, user_id: UUID | None, today: date | None = None
    ) -> list[StockItem]:
        """Return critical, low or soon-expiring items."""
        limit = (today or _today()) + timedelta(days=self.expiry_alert_days)
        return [
            item
            for item in self.repository.list_items(user_id)
            if item.status in {"critical", "low"}
            or (item.expiration_date is not None and item.expiration_date <= limit)
        ]

    def predict_stockouts(self, user_id: UUID | None) -> list[StockoutPrediction]:
        """Return items expected to run out within the alert window."""
        predictions = []
        for item in self.repository.list_items(user_id):
            days = item.days_until_stockout
            if 0 < days <= self.stockout_window_days:
                predictions.append(
                    StockoutPrediction(item=item, days_until_stockout=int(days))
                )
        return sorted(predictions, key=lambda p: p.days_until_stockout)

    def restock(self, item_id: UUID, quantity: float) -> StockItem:
        """Add quantity to an item and stamp the restock date."""
        if quantity <= 0:
            raise ValidationError("Restock quantity must be positive")
        item = self.get_item(item_id)
        updated = self.repository.update_item(
            item_id,
            {
                "current_stock": item.current_stock + quantity,
                "last_restocked": _today().isoformat(),
            },
        )
        if item.user_id is not None:
            self.activity_service.record(
                item.user_id,
                STOCK_ADDED,
                item_name=item.name,
                quantity=quantity,
                unit=item.unit,
            )
        _logger.info("Restocked %s by %s %s", item.name, quantity, item.unit)
        return updated

    def restock_orders(self, user_id: UUID | None) -> list[RestockOrder]:
        """Return low and critical items with the quantity to reach max stock."""
        return [
            RestockOrder(
                item=item, quantity=max(item.max_stock - item.current_stock, 0)
            )
            for item in self.repository.list_items(user_id)
            if item.status in {"critical", "low"}
        ]


def _sort(items: list[StockItem], sort_by: str) -> list[StockItem]:
    if sort_by == "stock":
        return sorted(items, key=lambda item: item.current_stock)
    if sort_by == "consumption":
        return sorted(items, key=lambda item: item.weekly_consumption, reverse=True)
    if sort_by == "value":
        return sorted(items, key=lambda item: item.stock_value, reverse=True)
    return sorted(items, key=lambda item: item.name.lower())


def _check_thresholds(payload: dict[str, object]) -> None:
    min_stock = payload.get("min_stock")
    max_stock = payload.get("max_stock")
    if min_stock is not None and max_stock is not None and min_stock > max_stock:
        raise ValidationError("Minimum stock cannot exceed maximum stock")


def _today() -> date:
    return datetime.now(tz=UTC).date()

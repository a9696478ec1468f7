"""Stock tracking models and status rules."""

import math
from dataclasses import dataclass
from datetime import date
from typing import Literal
from uuid import UUID

StockStatus = Literal["optimal", "low", "critical", "overstocked"]

STOCK_STATUSES: tuple[StockStatus, ...] = ("optimal", "low", "critical", "overstocked")
DAYS_PER_WEEK = 7


def classify_stock(
    current_stock: float, min_stock: float, max_stock: float
) -> StockStatus:
    """Return the status label for a stock level."""
    if current_stock <= 0:
        return "critical"
    if current_stock <= min_stock:
        return "low"
    if current_stock > max_stock:
        return "overstocked"
    return "optimal"


def days_until_stockout(current_stock: float, weekly_consumption: float) -> float:
    """Whole days of stock left at the weekly rate, inf when nothing is used."""
    if weekly_consumption <= 0:
        return math.inf
    return math.floor(current_stock / weekly_consumption * DAYS_PER_WEEK)


@dataclass(frozen=True)
class StockItem:
    """Inventory record with reorder thresholds."""

    id: UUID
    user_id: UUID | None
    name: str
    category: str
    current_stock: float
    min_stock: float
    max_stock: float
    unit: str
    cost: float
    supplier: str | None = None
    last_restocked: date | None = None
    weekly_consumption: float = 0.0
    monthly_consumption: float = 0.0
    expiration_date: date | None = None

    @property
    def status(self) -> StockStatus:
        return classify_stock(self.current_stock, self.min_stock, self.max_stock)

    @property
    def stock_value(self) -> float:
        return round(self.current_stock * self.cost, 2)

    @property
    def days_until_stockout(self) -> float:
        return days_until_stockout(self.current_stock, self.weekly_consumption)


@dataclass(frozen=True)
class StockStats:
    """Totals across a set of stock items."""

    total_items: int
    critical_items: int
    low_stock_items: int
    overstocked_items: int
    total_value: float
    weekly_consumption_cost: float
    monthly_consumption_cost: float


@dataclass(frozen=True)
class StockoutPrediction:
    """Item expected to run out inside the alert window."""

    item: StockItem
    days_until_stockout: int


@dataclass(frozen=True)
class RestockOrder:
    """Quantity needed to bring an item back to its maximum."""

    item: StockItem
    quantity: float

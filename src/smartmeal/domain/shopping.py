"""Domain models for shopping lists."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

LIST_STATUSES = ("generated", "sent", "shopping", "completed")
DEFAULT_CATEGORY = "Other"


@dataclass(frozen=True)
class ShoppingItem:
    """A purchasable line of a shopping list."""

    id: str
    name: str
    quantity: float
    unit: str
    category: str
    estimated_price: float
    purchased: bool = False
    ingredient_id: UUID | None = None


@dataclass(frozen=True)
class ShoppingList:
    """A generated or user-built collection of shopping items."""

    id: UUID
    user_id: UUID
    name: str
    start_date: date | None
    end_date: date | None
    household_size: int
    estimated_budget: float
    estimated_time_min: int
    items: list[ShoppingItem] = field(default_factory=list)
    status: str = "generated"
    actual_cost: float | None = None
    generated_at: datetime | None = None

    @property
    def purchased_count(self) -> int:
        return sum(1 for item in self.items if item.purchased)

    @property
    def progress(self) -> float:
        """Share of purchased items as a percentage, 0 for an empty list."""
        if not self.items:
            return 0.0
        return self.purchased_count / len(self.items) * 100


@dataclass(frozen=True)
class CategoryStats:
    """Aggregated spend for one item category."""

    total_cost: float
    item_count: int


def group_items_by_category(
    items: list[ShoppingItem],
) -> dict[str, list[ShoppingItem]]:
    """Group items by category, keeping first-seen category order."""
    groups: dict[str, list[ShoppingItem]] = {}
    for item in items:
        groups.setdefault(item.category, []).append(item)
    return groups


def category_stats(lists: list[ShoppingList]) -> dict[str, CategoryStats]:
    """Sum estimated prices and item counts per category across lists."""
    totals: dict[str, tuple[float, int]] = {}
    for shopping_list in lists:
        for item in shopping_list.items:
            cost, count = totals.get(item.category, (0.0, 0))
            totals[item.category] = (cost + item.estimated_price, count + 1)
    return {
        category: CategoryStats(total_cost=cost, item_count=count)
        for category, (cost, count) in totals.items()
    }

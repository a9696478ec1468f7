"""Domain models for the ingredient catalog."""

from dataclasses import dataclass
from uuid import UUID

INGREDIENT_CATEGORIES = (
    "Fruits & Vegetables",
    "Meat",
    "Fish",
    "Dairy",
    "Grocery",
    "Beverages",
)


@dataclass(frozen=True)
class Ingredient:
    """Catalog entry used to price and categorize shopping items."""

    id: UUID
    name: str
    category: str
    unit: str
    stock: float
    min_stock: float
    cost: float
    image_url: str | None = None

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.min_stock

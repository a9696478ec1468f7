"""Domain models for dishes."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

DISH_CATEGORIES = ("breakfast", "lunch", "dinner")
DIFFICULTIES = ("easy", "medium", "hard")


@dataclass(frozen=True)
class NutritionFacts:
    """Per-serving nutrition for a dish."""

    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0


@dataclass(frozen=True)
class DishIngredient:
    """Ingredient line of a recipe."""

    name: str
    quantity: float
    unit: str


@dataclass(frozen=True)
class Dish:
    """A recipe record with nutrition and dietary metadata."""

    id: UUID
    owner_id: UUID | None
    name: str
    description: str
    category: str
    cooking_time_min: int
    servings: int
    difficulty: str
    image_url: str | None = None
    is_favorite: bool = False
    is_vegetarian: bool = False
    is_halal: bool = False
    is_gluten_free: bool = False
    is_sport_friendly: bool = False
    ingredients: list[DishIngredient] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    nutrition: NutritionFacts = field(default_factory=NutritionFacts)
    approved: bool = False
    created_at: date | None = None

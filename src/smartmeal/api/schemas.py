"""Pydantic request models for the HTTP API."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Sign-up form."""

    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)


class LoginRequest(BaseModel):
    """Sign-in form."""

    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+$")
    password: str


class ProfileUpdate(BaseModel):
    """Profile fields a user may change; omitted fields are kept."""

    first_name: str | None = None
    last_name: str | None = None
    age: int | None = Field(default=None, ge=1, le=120)
    gender: str | None = None
    diet_preference: str | None = None
    household_size: int | None = Field(default=None, ge=1, le=20)


class SetupRequest(BaseModel):
    """Answers of the profile setup wizard."""

    first_name: str
    last_name: str
    age: int
    gender: str
    diet_preference: str
    household_size: int


class DishIngredientIn(BaseModel):
    name: str = Field(min_length=1)
    quantity: float = Field(ge=0)
    unit: str = ""


class NutritionIn(BaseModel):
    calories: float = Field(default=0, ge=0)
    protein_g: float = Field(default=0, ge=0)
    carbs_g: float = Field(default=0, ge=0)
    fat_g: float = Field(default=0, ge=0)


class DishCreate(BaseModel):
    """New dish submitted for review."""

    name: str
    description: str
    category: str
    cooking_time_min: int = Field(default=0, ge=0)
    servings: int = Field(default=1, ge=1)
    difficulty: str = "medium"
    image_url: str | None = None
    is_vegetarian: bool = False
    is_halal: bool = False
    is_gluten_free: bool = False
    is_sport_friendly: bool = False
    ingredients: list[DishIngredientIn] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    nutrition: NutritionIn = Field(default_factory=NutritionIn)


class DishUpdate(BaseModel):
    """Partial dish edit."""

    name: str | None = None
    description: str | None = None
    category: str | None = None
    cooking_time_min: int | None = Field(default=None, ge=0)
    servings: int | None = Field(default=None, ge=1)
    difficulty: str | None = None
    image_url: str | None = None
    is_vegetarian: bool | None = None
    is_halal: bool | None = None
    is_gluten_free: bool | None = None
    is_sport_friendly: bool | None = None
    ingredients: list[DishIngredientIn] | None = None
    instructions: list[str] | None = None
    nutrition: NutritionIn | None = None


class IngredientIn(BaseModel):
    """Catalog ingredient."""

    name: str
    category: str
    unit: str
    stock: float = Field(default=0, ge=0)
    min_stock: float = Field(default=0, ge=0)
    cost: float = Field(default=0, ge=0)
    image_url: str | None = None


class PlanSlotRequest(BaseModel):
    """Dish to place into a meal slot."""

    day: date
    slot: str
    dish_id: UUID


class ShoppingItemIn(BaseModel):
    """Item added to a list by hand."""

    name: str = Field(min_length=1)
    quantity: float = Field(gt=0)
    unit: str = ""
    category: str | None = None
    estimated_price: float | None = Field(default=None, ge=0)


class ShoppingListCreate(BaseModel):
    """Empty or hand-built list."""

    name: str = Field(min_length=1)
    start_date: date | None = None
    end_date: date | None = None
    household_size: int | None = Field(default=None, ge=1, le=20)


class GenerateListRequest(BaseModel):
    """Date range whose planned meals feed the list."""

    start_date: date
    end_date: date


class ListStatusUpdate(BaseModel):
    status: str
    actual_cost: float | None = Field(default=None, ge=0)


class StockItemIn(BaseModel):
    """Stock item fields."""

    name: str = Field(min_length=1)
    category: str
    current_stock: float = Field(ge=0)
    min_stock: float = Field(ge=0)
    max_stock: float = Field(ge=0)
    unit: str
    cost: float = Field(default=0, ge=0)
    supplier: str | None = None
    weekly_consumption: float = Field(default=0, ge=0)
    monthly_consumption: float = Field(default=0, ge=0)
    expiration_date: date | None = None


class RestockRequest(BaseModel):
    quantity: float = Field(gt=0)

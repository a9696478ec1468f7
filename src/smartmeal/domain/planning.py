"""Domain models for weekly meal planning."""

from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

MEAL_SLOTS = ("breakfast", "lunch", "dinner")
DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class PlannedDish:
    """Snapshot of a dish copied into a meal plan slot."""

    dish_id: UUID
    name: str
    category: str
    cooking_time_min: int
    servings: int
    calories: float
    is_vegetarian: bool = False
    is_halal: bool = False
    is_gluten_free: bool = False
    is_sport_friendly: bool = False


@dataclass(frozen=True)
class MealPlan:
    """Dishes assigned to the meal slots of one calendar day."""

    user_id: UUID
    day: date
    breakfast: PlannedDish | None = None
    lunch: PlannedDish | None = None
    dinner: PlannedDish | None = None

    def slot(self, name: str) -> PlannedDish | None:
        """Return the dish planned for a slot."""
        return getattr(self, name)

    def planned(self) -> list[tuple[str, PlannedDish]]:
        """Return filled slots in breakfast, lunch, dinner order."""
        return [
            (name, dish)
            for name in MEAL_SLOTS
            if (dish := self.slot(name)) is not None
        ]

    @property
    def total_calories(self) -> float:
        return sum(dish.calories for _, dish in self.planned())


@dataclass(frozen=True)
class WeekPlan:
    """Seven consecutive day plans starting on a Monday."""

    start: date
    days: list[MealPlan]

    @property
    def end(self) -> date:
        return self.start + timedelta(days=DAYS_PER_WEEK - 1)

    @property
    def planned_meal_count(self) -> int:
        return sum(len(day.planned()) for day in self.days)

    @property
    def total_calories(self) -> float:
        return sum(day.total_calories for day in self.days)


def week_start(day: date) -> date:
    """Return the Monday of the week containing day."""
    return day - timedelta(days=day.weekday())


def week_days(start: date) -> list[date]:
    """Return the seven dates of the week beginning at start."""
    return [start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]

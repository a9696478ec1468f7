"""Admin domain models."""

from dataclasses import dataclass
from datetime import date

from smartmeal.domain.planning import MealPlan
from smartmeal.domain.shopping import CategoryStats


@dataclass(frozen=True)
class AdminOverview:
    """Record counts shown on the admin dashboard."""

    users: int
    approved_dishes: int
    meal_plans: int
    shopping_lists: int


@dataclass(frozen=True)
class MonthlyShoppingReport:
    """Shopping list totals for one calendar month."""

    month: str
    total_lists: int
    total_estimated_cost: float
    total_actual_cost: float
    average_household_size: int
    completed_lists: int
    savings_rate: int
    categories: dict[str, CategoryStats]


@dataclass(frozen=True)
class WeeklyPlanningReport:
    """Day plans of every user for one Monday-to-Sunday week."""

    start: date
    end: date
    plans: list[MealPlan]

    @property
    def total_plans(self) -> int:
        return len(self.plans)

    @property
    def planned_meals(self) -> int:
        return sum(len(plan.planned()) for plan in self.plans)

    @property
    def average_calories(self) -> float:
        if not self.plans:
            return 0.0
        total = sum(plan.total_calories for plan in self.plans)
        return round(total / len(self.plans), 1)

    @property
    def total_users(self) -> int:
        return len({plan.user_id for plan in self.plans})

"""Per-user dashboard summary."""

from dataclasses import dataclass
from datetime import UTC, date, datetime

from smartmeal.domain.models import UserProfile
from smartmeal.services.dishes import DishService
from smartmeal.services.planning import PlanningService
from smartmeal.services.shopping import ShoppingService

MENU_SLOTS = ("lunch", "dinner")


@dataclass(frozen=True)
class MenuEntry:
    """A lunch or dinner planned this week."""

    day: date
    slot: str
    dish_name: str


@dataclass(frozen=True)
class DashboardSummary:
    """Numbers and menu shown on the user's home screen."""

    total_dishes: int
    planned_meals: int
    household_size: int
    shopping_items: int
    purchased_items: int
    estimated_budget: float
    week_menu: list[MenuEntry]


@dataclass
class DashboardService:
    """Builds the dashboard from the feature services."""

    dish_service: DishService
    planning_service: PlanningService
    shopping_service: ShoppingService

    def summary(self, user: UserProfile, today: date | None = None) -> DashboardSummary:
        """Return the dashboard for the week containing today."""
        week = self.planning_service.get_week(
            user.id, today or datetime.now(tz=UTC).date()
        )
        shopping = self.shopping_service.overview(user.id)
        menu = [
            MenuEntry(day=plan.day, slot=slot, dish_name=dish.name)
            for plan in week.days
            for slot, dish in plan.planned()
            if slot in MENU_SLOTS
        ]
        return DashboardSummary(
            total_dishes=len(self.dish_service.list_dishes(user)),
            planned_meals=week.planned_meal_count,
            household_size=user.household_size,
            shopping_items=shopping.total_items,
            purchased_items=shopping.purchased_items,
            estimated_budget=shopping.total_budget,
            week_menu=menu,
        )

"""Weekly meal planning."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from smartmeal.domain.activity import MEAL_PLANNED
from smartmeal.domain.dishes import Dish
from smartmeal.domain.planning import (
    MEAL_SLOTS,
    MealPlan,
    PlannedDish,
    WeekPlan,
    week_days,
    week_start,
)
from smartmeal.errors import NotFoundError, ValidationError
from smartmeal.services.activity import ActivityService
from smartmeal.services.dishes import DishService


class MealPlanRepository(Protocol):
    """Persistence interface for per-day meal plans."""

    def get_plan(self, user_id: UUID, day: date) -> MealPlan | None:
        """Return the plan for one day, if present."""

    def list_plans(self, user_id: UUID, start: date, end: date) -> list[MealPlan]:
        """Return plans dated within [start, end]."""

    def set_slot(
        self, user_id: UUID, day: date, slot: str, dish: PlannedDish
    ) -> MealPlan:
        """Write one slot, keeping the other slots of the day."""

    def clear_slot(self, user_id: UUID, day: date, slot: str) -> MealPlan | None:
        """Remove one slot, keeping the other slots of the day."""

    def count_plans(self) -> int:
        """Return the number of stored day plans."""

    def list_all(
        self, start: date, end: date, user_id: UUID | None = None
    ) -> list[MealPlan]:
        """Return plans of every user dated within [start, end]."""

    def delete_plan(self, user_id: UUID, day: date) -> None:
        """Delete the plan for one day."""


@dataclass
class PlanningService:
    """Application service for the weekly planning grid."""

    repository: MealPlanRepository
    dish_service: DishService
    activity_service: ActivityService

    def get_week(self, user_id: UUID, day: date) -> WeekPlan:
        """Return the Monday-to-Sunday week containing day."""
        start = week_start(day)
        dates = week_days(start)
        stored = {
            plan.day: plan
            for plan in self.repository.list_plans(user_id, dates[0], dates[-1])
            if dates[0] <= plan.day <= dates[-1]
        }
        return WeekPlan(
            start=start,
            days=[stored.get(d) or MealPlan(user_id=user_id, day=d) for d in dates],
        )

    def get_day(self, user_id: UUID, day: date) -> MealPlan:
        """Return the plan for one day, empty when nothing is planned."""
        return self.repository.get_plan(user_id, day) or MealPlan(
            user_id=user_id, day=day
        )

    def add_dish(self, user_id: UUID, day: date, slot: str, dish_id: UUID) -> MealPlan:
        """Place a snapshot of a dish into a slot."""
        _check_slot(slot)
        dish = self.dish_service.get_dish(dish_id)
        plan = self.repository.set_slot(user_id, day, slot, snapshot_dish(dish))
        self.activity_service.record(
            user_id,
            MEAL_PLANNED,
            dish_name=dish.name,
            slot=slot,
            day=day.isoformat(),
        )
        return plan

    def remove_dish(self, user_id: UUID, day: date, slot: str) -> MealPlan:
        """Clear one slot of a day."""
        _check_slot(slot)
        plan = self.repository.clear_slot(user_id, day, slot)
        return plan or MealPlan(user_id=user_id, day=day)

    def delete_plan(self, user_id: UUID, day: date) -> None:
        """Delete a whole day plan of any user."""
        if self.repository.get_plan(user_id, day) is None:
            raise NotFoundError(f"No meal plan for {user_id} on {day.isoformat()}")
        self.repository.delete_plan(user_id, day)

    def day_calories(self, user_id: UUID, day: date) -> float:
        """Return planned calories for one day."""
        return self.get_day(user_id, day).total_calories

    def suggest_today(self, user_id: UUID, today: date | None = None) -> MealPlan:
        """Fill today's slots with the first approved dish of each category."""
        day = today or datetime.now(tz=UTC).date()
        plan = self.get_day(user_id, day)
        for slot in MEAL_SLOTS:
            candidates = self.dish_service.list_approved(category=slot)
            if candidates:
                plan = self.add_dish(user_id, day, slot, candidates[0].id)
        return plan


def snapshot_dish(dish: Dish) -> PlannedDish:
    """Copy the fields a plan slot keeps from a dish."""
    return PlannedDish(
        dish_id=dish.id,
        name=dish.name,
        category=dish.category,
        cooking_time_min=dish.cooking_time_min,
        servings=dish.servings,
        calories=dish.nutrition.calories,
        is_vegetarian=dish.is_vegetarian,
        is_halal=dish.is_halal,
        is_gluten_free=dish.is_gluten_free,
        is_sport_friendly=dish.is_sport_friendly,
    )


def _check_slot(slot: str) -> None:
    if slot not in MEAL_SLOTS:
        raise ValidationError(f"Unknown meal slot: {slot}")

"""Dish and recipe management."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from smartmeal.domain.activity import DISH_ADDED
from smartmeal.domain.dishes import DIFFICULTIES, DISH_CATEGORIES, Dish
from smartmeal.domain.models import UserProfile
from smartmeal.errors import NotFoundError, ValidationError
from smartmeal.services.activity import ActivityService


class DishRepository(Protocol):
    """Persistence interface for dishes."""

    def create_dish(self, owner_id: UUID | None, payload: dict[str, object]) -> Dish:
        """Create a dish and return it."""

    def update_dish(self, dish_id: UUID, payload: dict[str, object]) -> Dish:
        """Update a dish and return it."""

    def get_dish(self, dish_id: UUID) -> Dish | None:
        """Return a dish by id, if present."""

    def list_dishes(self) -> list[Dish]:
        """Return all dishes."""

    def delete_dish(self, dish_id: UUID) -> None:
        """Delete a dish."""


@dataclass(frozen=True)
class DishFilter:
    """Criteria for the dish list."""

    search: str | None = None
    category: str | None = None
    difficulty: str | None = None
    favorites_only: bool = False

    def matches(self, dish: Dish) -> bool:
        if self.search:
            term = self.search.lower()
            if term not in dish.name.lower() and term not in dish.description.lower():
                return False
        if self.category and dish.category != self.category:
            return False
        if self.difficulty and dish.difficulty != self.difficulty:
            return False
        return not self.favorites_only or dish.is_favorite


@dataclass
class DishService:
    """Application service for dishes."""

    repository: DishRepository
    activity_service: ActivityService

    def create_dish(self, owner: UserProfile, payload: dict[str, object]) -> Dish:
        """Create a dish pending approval."""
        _validate(payload)
        if not payload.get("name") or not payload.get("description"):
            raise ValidationError("Name and description are required")
        dish = self.repository.create_dish(
            owner.id,
            {
                **payload,
                "is_favorite": False,
                "approved": False,
                "created_at": datetime.now(tz=UTC).date().isoformat(),
            },
        )
        self.activity_service.record(owner.id, DISH_ADDED, dish_name=dish.name)
        return dish

    def update_dish(self, dish_id: UUID, payload: dict[str, object]) -> Dish:
        """Apply an edit; edited dishes go back to review."""
        self.get_dish(dish_id)
        _validate(payload)
        return self.repository.update_dish(dish_id, {**payload, "approved": False})

    def approve_dish(self, dish_id: UUID) -> Dish:
        """Mark a dish as approved."""
        self.get_dish(dish_id)
        return self.repository.update_dish(dish_id, {"approved": True})

    def toggle_favorite(self, dish_id: UUID) -> Dish:
        """Flip the favorite flag of a dish."""
        dish = self.get_dish(dish_id)
        return self.repository.update_dish(
            dish_id, {"is_favorite": not dish.is_favorite}
        )

    def delete_dish(self, dish_id: UUID) -> None:
        """Delete a dish."""
        self.get_dish(dish_id)
        self.repository.delete_dish(dish_id)

    def find_dish(self, dish_id: UUID) -> Dish | None:
        """Return a dish, or None when it was deleted."""
        return self.repository.get_dish(dish_id)

    def get_dish(self, dish_id: UUID) -> Dish:
        """Return a dish or raise when missing."""
        dish = self.find_dish(dish_id)
        if dish is None:
            raise NotFoundError(f"Dish {dish_id} not found")
        return dish

    def list_dishes(
        self, viewer: UserProfile, dish_filter: DishFilter | None = None
    ) -> list[Dish]:
        """Return the dishes a viewer may see that match the filter."""
        criteria = dish_filter or DishFilter()
        return [
            dish
            for dish in self.repository.list_dishes()
            if _visible_to(dish, viewer) and criteria.matches(dish)
        ]

    def list_all(self, dish_filter: DishFilter | None = None) -> list[Dish]:
        """Return every dish, pending ones included."""
        criteria = dish_filter or DishFilter()
        return [
            dish for dish in self.repository.list_dishes() if criteria.matches(dish)
        ]

    def list_approved(self, category: str | None = None) -> list[Dish]:
        """Return approved dishes, optionally for one category."""
        return [
            dish
            for dish in self.repository.list_dishes()
            if dish.approved and (category is None or dish.category == category)
        ]


def _visible_to(dish: Dish, viewer: UserProfile) -> bool:
    return viewer.is_admin or dish.approved or dish.owner_id == viewer.id


def _validate(payload: dict[str, object]) -> None:
    category = payload.get("category")
    if category is not None and category not in DISH_CATEGORIES:
        raise ValidationError(f"Unknown dish category: {category}")
    difficulty = payload.get("difficulty")
    if difficulty is not None and difficulty not in DIFFICULTIES:
        raise ValidationError(f"Unknown difficulty: {difficulty}")

"""Shopping list building, generation and tracking."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID, uuid4

from smartmeal.domain.activity import LIST_GENERATED
from smartmeal.domain.models import UserProfile
from smartmeal.domain.shopping import (
    DEFAULT_CATEGORY,
    LIST_STATUSES,
    ShoppingItem,
    ShoppingList,
)
from smartmeal.errors import NotFoundError, ValidationError
from smartmeal.services.activity import ActivityService
from smartmeal.services.dishes import DishService
from smartmeal.services.ingredients import IngredientService
from smartmeal.services.planning import MealPlanRepository

_logger = logging.getLogger(__name__)

BASE_SHOPPING_MINUTES = 10
MINUTES_PER_ITEM = 2


class ShoppingListRepository(Protocol):
    """Persistence interface for shopping lists."""

    def create_list(self, user_id: UUID, payload: dict[str, object]) -> ShoppingList:
        """Create a list and return it."""

    def get_list(self, list_id: UUID) -> ShoppingList | None:
        """Return a list by id, if present."""

    def list_for_user(self, user_id: UUID) -> list[ShoppingList]:
        """Return a user's lists."""

    def list_all(self, status: str | None = None) -> list[ShoppingList]:
        """Return every list, newest week first, optionally by status."""

    def update_list(self, list_id: UUID, payload: dict[str, object]) -> ShoppingList:
        """Update list fields and return the list."""

    def delete_list(self, list_id: UUID) -> None:
        """Delete a list."""


@dataclass(frozen=True)
class ShoppingOverview:
    """Totals across a user's shopping lists."""

    active_lists: int
    total_items: int
    purchased_items: int
    total_budget: float


@dataclass
class ShoppingService:
    """Application service for shopping lists."""

    repository: ShoppingListRepository
    plan_repository: MealPlanRepository
    dish_service: DishService
    ingredient_service: IngredientService
    activity_service: ActivityService

    def list_lists(self, user_id: UUID) -> list[ShoppingList]:
        """Return the user's lists."""
        return self.repository.list_for_user(user_id)

    def get_list(self, list_id: UUID) -> ShoppingList:
        """Return a list or raise when missing."""
        shopping_list = self.repository.get_list(list_id)
        if shopping_list is None:
            raise NotFoundError(f"Shopping list {list_id} not found")
        return shopping_list

    def create_list(  # noqa: PLR0913
        self,
        user: UserProfile,
        name: str,
        start_date: date | None = None,
        end_date: date | None = None,
        items: list[ShoppingItem] | None = None,
        household_size: int | None = None,
    ) -> ShoppingList:
        """Create a list the user will fill in by hand."""
        _check_range(start_date, end_date)
        lines = items or []
        return self.repository.create_list(
            user.id,
            {
                "name": name,
                "start_date": start_date.isoformat() if start_date else None,
                "end_date": end_date.isoformat() if end_date else None,
                "household_size": household_size or user.household_size,
                "estimated_budget": round(sum(i.estimated_price for i in lines), 2),
                "estimated_time_min": _estimated_minutes(lines),
                "items": [serialize_item(item) for item in lines],
                "status": "generated",
            },
        )

    def add_item(  # noqa: PLR0913
        self,
        list_id: UUID,
        name: str,
        quantity: float,
        unit: str,
        category: str | None = None,
        estimated_price: float | None = None,
    ) -> ShoppingList:
        """Append an item, pricing it from the catalog when possible."""
        shopping_list = self.get_list(list_id)
        catalog = self.ingredient_service.by_name().get(name.lower())
        item = ShoppingItem(
            id=uuid4().hex,
            name=name,
            quantity=quantity,
            unit=unit,
            category=category or (catalog.category if catalog else DEFAULT_CATEGORY),
            estimated_price=(
                estimated_price
                if estimated_price is not None
                else _price(catalog.cost if catalog else 0.0, quantity)
            ),
            ingredient_id=catalog.id if catalog else None,
        )
        items = [*shopping_list.items, item]
        return self.repository.update_list(
            list_id,
            {
                "items": [serialize_item(line) for line in items],
                "estimated_budget": round(sum(i.estimated_price for i in items), 2),
                "estimated_time_min": _estimated_minutes(items),
            },
        )

    def toggle_item(self, list_id: UUID, item_id: str) -> ShoppingList:
        """Flip the purchased flag of one item."""
        shopping_list = self.get_list(list_id)
        if not any(item.id == item_id for item in shopping_list.items):
            raise NotFoundError(f"Item {item_id} not found in list {list_id}")
        items = [
            ShoppingItem(
                id=item.id,
                name=item.name,
                quantity=item.quantity,
                unit=item.unit,
                category=item.category,
                estimated_price=item.estimated_price,
                purchased=not item.purchased if item.id == item_id else item.purchased,
                ingredient_id=item.ingredient_id,
            )
            for item in shopping_list.items
        ]
        return self.repository.update_list(
            list_id, {"items": [serialize_item(item) for item in items]}
        )

    def set_status(
        self, list_id: UUID, status: str, actual_cost: float | None = None
    ) -> ShoppingList:
        """Move a list through generated, sent, shopping and completed."""
        if status not in LIST_STATUSES:
            raise ValidationError(f"Unknown list status: {status}")
        self.get_list(list_id)
        payload: dict[str, object] = {"status": status}
        if actual_cost is not None:
            payload["actual_cost"] = actual_cost
        return self.repository.update_list(list_id, payload)

    def delete_list(self, list_id: UUID) -> None:
        """Delete a list."""
        self.get_list(list_id)
        self.repository.delete_list(list_id)

    def generate_list(
        self, user: UserProfile, start_date: date, end_date: date
    ) -> ShoppingList:
        """Build a list from the ingredients of the dishes planned in a range."""
        _check_range(start_date, end_date)
        plans = self.plan_repository.list_plans(user.id, start_date, end_date)
        quantities: dict[tuple[str, str], tuple[str, float]] = {}
        for plan in plans:
            if not start_date <= plan.day <= end_date:
                continue
            for _, planned in plan.planned():
                dish = self.dish_service.find_dish(planned.dish_id)
                if dish is None:
                    _logger.warning(
                        "Skipping deleted dish in plan",
                        extra={"dish_id": str(planned.dish_id)},
                    )
                    continue
                scale = user.household_size / max(dish.servings, 1)
                for ingredient in dish.ingredients:
                    key = (ingredient.name.lower(), ingredient.unit)
                    name, total = quantities.get(key, (ingredient.name, 0.0))
                    quantities[key] = (name, total + ingredient.quantity * scale)
        if not quantities:
            raise ValidationError("No planned dish ingredients in the selected range")

        catalog = self.ingredient_service.by_name()
        items = []
        for (key, unit), (name, quantity) in quantities.items():
            entry = catalog.get(key)
            items.append(
                ShoppingItem(
                    id=uuid4().hex,
                    name=name,
                    quantity=round(quantity, 2),
                    unit=unit,
                    category=entry.category if entry else DEFAULT_CATEGORY,
                    estimated_price=_price(entry.cost if entry else 0.0, quantity),
                    ingredient_id=entry.id if entry else None,
                )
            )
        shopping_list = self.create_list(
            user,
            name=f"Generated list - {start_date.isoformat()}",
            start_date=start_date,
            end_date=end_date,
            items=items,
        )
        self.activity_service.record(
            user.id, LIST_GENERATED, list_name=shopping_list.name, items=len(items)
        )
        return shopping_list

    def overview(self, user_id: UUID) -> ShoppingOverview:
        """Summarize the user's lists."""
        lists = self.list_lists(user_id)
        return ShoppingOverview(
            active_lists=len(lists),
            total_items=sum(len(item_list.items) for item_list in lists),
            purchased_items=sum(item_list.purchased_count for item_list in lists),
            total_budget=round(sum(item.estimated_budget for item in lists), 2),
        )


def serialize_item(item: ShoppingItem) -> dict[str, object]:
    """Convert an item to its stored JSON shape."""
    return {
        "id": item.id,
        "name": item.name,
        "quantity": item.quantity,
        "unit": item.unit,
        "category": item.category,
        "estimated_price": item.estimated_price,
        "purchased": item.purchased,
        "ingredient_id": str(item.ingredient_id) if item.ingredient_id else None,
    }


def _price(unit_cost: float, quantity: float) -> float:
    return round(unit_cost * quantity, 2)


def _estimated_minutes(items: list[ShoppingItem]) -> int:
    return BASE_SHOPPING_MINUTES + MINUTES_PER_ITEM * len(items)


def _check_range(start: date | None, end: date | None) -> None:
    if start and end and end < start:
        raise ValidationError("End date must not be before start date")

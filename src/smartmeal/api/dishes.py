"""Dish endpoints."""

from dataclasses import asdict
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from smartmeal.api.deps import get_container, require_setup
from smartmeal.api.schemas import DishCreate, DishUpdate
from smartmeal.containers import AppContainer
from smartmeal.domain.dishes import Dish
from smartmeal.domain.models import UserProfile
from smartmeal.services.dishes import DishFilter

router = APIRouter(prefix="/dishes", tags=["dishes"])


def _owned_dish(container: AppContainer, user: UserProfile, dish_id: UUID) -> Dish:
    dish = container.dish_service.get_dish(dish_id)
    if dish.owner_id != user.id and not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
    return dish


def _visible_dish(container: AppContainer, user: UserProfile, dish_id: UUID) -> Dish:
    dish = container.dish_service.get_dish(dish_id)
    if not (dish.approved or dish.owner_id == user.id or user.is_admin):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return dish


@router.get("")
async def list_dishes(  # noqa: PLR0913
    search: str | None = None,
    category: str | None = None,
    difficulty: str | None = None,
    favorites_only: bool = False,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the dishes the caller can see."""
    dishes = container.dish_service.list_dishes(
        user,
        DishFilter(
            search=search,
            category=category,
            difficulty=difficulty,
            favorites_only=favorites_only,
        ),
    )
    return {"dishes": [asdict(dish) for dish in dishes]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_dish(
    body: DishCreate,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Submit a dish for review."""
    return asdict(container.dish_service.create_dish(user, body.model_dump()))


@router.get("/{dish_id}")
async def get_dish(
    dish_id: UUID,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return one dish."""
    return asdict(_visible_dish(container, user, dish_id))


@router.patch("/{dish_id}")
async def update_dish(
    dish_id: UUID,
    body: DishUpdate,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Edit a dish; it goes back to review."""
    _owned_dish(container, user, dish_id)
    dish = container.dish_service.update_dish(
        dish_id, body.model_dump(exclude_none=True)
    )
    return asdict(dish)


@router.post("/{dish_id}/favorite")
async def toggle_favorite(
    dish_id: UUID,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Flip the favorite flag of any dish the caller can see."""
    _visible_dish(container, user, dish_id)
    return asdict(container.dish_service.toggle_favorite(dish_id))


@router.delete("/{dish_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_dish(
    dish_id: UUID,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> None:
    """Delete a dish."""
    _owned_dish(container, user, dish_id)
    container.dish_service.delete_dish(dish_id)

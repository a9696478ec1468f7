"""Weekly meal plan endpoints."""

from datetime import UTC, date, datetime

from fastapi import APIRouter, Depends

from smartmeal.api import serializers
from smartmeal.api.deps import get_container, require_setup
from smartmeal.api.schemas import PlanSlotRequest
from smartmeal.containers import AppContainer
from smartmeal.domain.models import UserProfile

router = APIRouter(prefix="/meal-plans", tags=["planning"])


@router.get("/week")
async def get_week(
    day: date | None = None,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the Monday-to-Sunday grid containing day (default today)."""
    week = container.planning_service.get_week(
        user.id, day or datetime.now(tz=UTC).date()
    )
    return serializers.week_plan(week)


@router.get("/{day}")
async def get_day(
    day: date,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return one day's plan."""
    return serializers.meal_plan(container.planning_service.get_day(user.id, day))


@router.post("/slots")
async def add_dish(
    body: PlanSlotRequest,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Place a dish in a slot."""
    plan = container.planning_service.add_dish(
        user.id, body.day, body.slot, body.dish_id
    )
    return serializers.meal_plan(plan)


@router.delete("/{day}/{slot}")
async def remove_dish(
    day: date,
    slot: str,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Clear one slot."""
    plan = container.planning_service.remove_dish(user.id, day, slot)
    return serializers.meal_plan(plan)


@router.post("/suggestions")
async def suggest_today(
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Fill today's slots from the approved catalog."""
    return serializers.meal_plan(container.planning_service.suggest_today(user.id))

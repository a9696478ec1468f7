"""Dashboard and activity history endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query

from smartmeal.api.deps import get_container, require_setup
from smartmeal.containers import AppContainer
from smartmeal.domain.models import UserProfile

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard")
async def dashboard(
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's home screen numbers and weekly menu."""
    return asdict(container.dashboard_service.summary(user))


@router.get("/history")
async def history(
    limit: int = Query(default=50, ge=1, le=200),
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's recent activity, newest first."""
    events = container.activity_service.history(user.id, limit)
    return {"events": [asdict(event) for event in events]}

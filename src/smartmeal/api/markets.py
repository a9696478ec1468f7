"""Nearby markets endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from smartmeal.api.deps import get_container, require_setup
from smartmeal.containers import AppContainer
from smartmeal.domain.markets import MARKET_CATEGORIES, GeoPoint
from smartmeal.domain.models import UserProfile

router = APIRouter(prefix="/markets", tags=["markets"])


async def _origin(
    container: AppContainer,
    lat: float | None,
    lng: float | None,
    address: str | None,
) -> GeoPoint | None:
    if lat is not None and lng is not None:
        return GeoPoint(lat=lat, lng=lng)
    if address:
        return await container.market_service.geocode(address)
    return None


@router.get("")
async def nearby(  # noqa: PLR0913
    search: str | None = None,
    category: str | None = None,
    lat: float | None = None,
    lng: float | None = None,
    address: str | None = None,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return markets matching the filters, closest first with an origin."""
    origin = await _origin(container, lat, lng, address)
    results = await container.market_service.nearby(
        user, origin=origin, search=search, category=category
    )
    return {
        "origin": asdict(origin) if origin else None,
        "categories": list(MARKET_CATEGORIES),
        "markets": [asdict(result) for result in results],
    }


@router.get("/{market_id}")
async def get_market(
    market_id: str,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return one market."""
    market = container.market_service.get_market(market_id)
    return {**asdict(market), "is_favorite": market.id in user.favorite_market_ids}


@router.post("/{market_id}/favorite")
async def toggle_favorite(
    market_id: str,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Add or remove the market from the caller's favorites."""
    container.market_service.get_market(market_id)
    profile = container.user_service.toggle_favorite_market(user.id, market_id)
    return {"favorite_market_ids": profile.favorite_market_ids}


@router.get("/{market_id}/directions")
async def directions(  # noqa: PLR0913
    market_id: str,
    lat: float | None = None,
    lng: float | None = None,
    address: str | None = None,
    _: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Return a Google Maps directions link."""
    market = container.market_service.get_market(market_id)
    origin = await _origin(container, lat, lng, address)
    return {"url": container.market_service.directions_url(market, origin)}

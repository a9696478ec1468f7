"""Nearby market search backed by Google Maps."""

import logging
from dataclasses import dataclass, field
from urllib.parse import quote_plus

from smartmeal.adapters.google_maps_client import MapsClient
from smartmeal.domain.markets import (
    DEFAULT_MARKETS,
    UNKNOWN_DISTANCE_KM,
    GeoPoint,
    Market,
    NearbyMarket,
    haversine_km,
)
from smartmeal.domain.models import UserProfile
from smartmeal.errors import NotFoundError
from smartmeal.services.cache import Cache

_logger = logging.getLogger(__name__)

METERS_PER_KM = 1000


@dataclass
class MarketService:
    """Locate markets and rank them by distance from the user."""

    maps_client: MapsClient | None
    cache: Cache
    markets: tuple[Market, ...] = field(default=DEFAULT_MARKETS)
    geocode_ttl_seconds: int = 86400

    def get_market(self, market_id: str) -> Market:
        """Return a market or raise when unknown."""
        for market in self.markets:
            if market.id == market_id:
                return market
        raise NotFoundError(f"Market {market_id} not found")

    def search(
        self, search: str | None = None, category: str | None = None
    ) -> list[Market]:
        """Filter markets by name/address text and category."""
        term = (search or "").lower()
        return [
            market
            for market in self.markets
            if (term in market.name.lower() or term in market.address.lower())
            and (not category or market.category == category)
        ]

    async def nearby(
        self,
        user: UserProfile,
        origin: GeoPoint | None = None,
        search: str | None = None,
        category: str | None = None,
    ) -> list[NearbyMarket]:
        """Return matching markets, closest first when an origin is known."""
        markets = self.search(search, category)
        favorites = set(user.favorite_market_ids)
        if origin is None:
            return [
                NearbyMarket(
                    market=market,
                    distance_km=None,
                    duration=None,
                    is_favorite=market.id in favorites,
                )
                for market in markets
            ]
        distances = await self._distances(origin, markets)
        results = [
            NearbyMarket(
                market=market,
                distance_km=distance,
                duration=duration,
                is_favorite=market.id in favorites,
            )
            for market, (distance, duration) in zip(markets, distances, strict=True)
        ]
        return sorted(
            results,
            key=lambda result: (
                result.distance_km
                if result.distance_km is not None
                else UNKNOWN_DISTANCE_KM
            ),
        )

    async def geocode(self, address: str) -> GeoPoint | None:
        """Resolve an address to coordinates, caching the answer."""
        cache_key = f"geocode:{address.strip().lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, GeoPoint):
            return cached
        if self.maps_client is None:
            return None
        try:
            payload = await self.maps_client.geocode(address)
        except Exception:
            _logger.exception("Geocoding failed", extra={"address": address})
            return None
        results = payload.get("results") or []
        if payload.get("status") != "OK" or not results:
            return None
        location = results[0]["geometry"]["location"]
        point = GeoPoint(lat=float(location["lat"]), lng=float(location["lng"]))
        self.cache.set(cache_key, point, ttl_seconds=self.geocode_ttl_seconds)
        return point

    @staticmethod
    def directions_url(market: Market, origin: GeoPoint | None = None) -> str:
        """Return a Google Maps link to the market."""
        if origin is not None:
            return (
                "https://www.google.com/maps/dir/"
                f"{origin.as_param()}/{market.location.as_param()}"
            )
        return (
            "https://www.google.com/maps/search/?api=1&query="
            f"{quote_plus(market.address)}"
        )

    async def _distances(
        self, origin: GeoPoint, markets: list[Market]
    ) -> list[tuple[float | None, str | None]]:
        fallback = [
            (round(haversine_km(origin, market.location), 2), None)
            for market in markets
        ]
        if self.maps_client is None or not markets:
            return fallback
        try:
            payload = await self.maps_client.distance_matrix(
                origin.as_param(),
                [market.location.as_param() for market in markets],
            )
        except Exception:
            _logger.exception("Distance matrix request failed")
            return fallback
        rows = payload.get("rows") or []
        if payload.get("status") != "OK" or not rows:
            _logger.warning("Distance matrix returned %s", payload.get("status"))
            return fallback
        elements = rows[0].get("elements", [])
        distances: list[tuple[float | None, str | None]] = []
        for index, _ in enumerate(markets):
            element = elements[index] if index < len(elements) else {}
            distance = element.get("distance")
            duration = element.get("duration")
            distances.append(
                (
                    distance["value"] / METERS_PER_KM if distance else None,
                    duration["text"] if duration else None,
                )
            )
        return distances

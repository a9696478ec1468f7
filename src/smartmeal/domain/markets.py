"""Market locator models."""

import math
from dataclasses import dataclass

EARTH_RADIUS_KM = 6371.0
UNKNOWN_DISTANCE_KM = 999.0


@dataclass(frozen=True)
class GeoPoint:
    """Latitude and longitude in decimal degrees."""

    lat: float
    lng: float

    def as_param(self) -> str:
        return f"{self.lat},{self.lng}"


@dataclass(frozen=True)
class Market:
    """A food market shown on the locator map."""

    id: str
    name: str
    address: str
    location: GeoPoint
    category: str
    rating: float
    is_open: bool
    open_hours: str
    description: str
    phone: str | None = None
    website: str | None = None


@dataclass(frozen=True)
class NearbyMarket:
    """Market annotated with its distance from the user."""

    market: Market
    distance_km: float | None
    duration: str | None
    is_favorite: bool


MARKET_CATEGORIES = (
    "Covered market",
    "Organic market",
    "Open-air market",
    "Organic supermarket",
)

DEFAULT_MARKETS: tuple[Market, ...] = (
    Market(
        id="1",
        name="Marché Saint-Germain",
        address="4-6 Rue Lobineau, 75006 Paris",
        location=GeoPoint(lat=48.8532, lng=2.3357),
        category="Covered market",
        rating=4.3,
        is_open=True,
        open_hours="Tue-Sat 8:30-19:30, Sun 8:30-14:00",
        description="Traditional market in the heart of Saint-Germain-des-Prés",
        phone="01 43 26 45 87",
        website="marche-saint-germain.fr",
    ),
    Market(
        id="2",
        name="Marché des Enfants Rouges",
        address="39 Rue de Bretagne, 75003 Paris",
        location=GeoPoint(lat=48.8633, lng=2.3627),
        category="Covered market",
        rating=4.5,
        is_open=True,
        open_hours="Tue-Sat 8:30-19:30, Sun 8:30-14:00",
        description="The oldest covered market in Paris",
        phone="01 42 71 28 56",
    ),
    Market(
        id="3",
        name="Marché Raspail Bio",
        address="Boulevard Raspail, 75006 Paris",
        location=GeoPoint(lat=48.8503, lng=2.3249),
        category="Organic market",
        rating=4.2,
        is_open=False,
        open_hours="Sun 9:00-14:00",
        description="Market dedicated entirely to organic produce",
    ),
    Market(
        id="4",
        name="Marché République",
        address="Place de la République, 75011 Paris",
        location=GeoPoint(lat=48.8686, lng=2.3655),
        category="Open-air market",
        rating=4.0,
        is_open=True,
        open_hours="Thu and Sun 7:00-14:30",
        description="Large open-air market with many local producers",
    ),
)


def haversine_km(origin: GeoPoint, destination: GeoPoint) -> float:
    """Great-circle distance between two points in kilometers."""
    lat1, lat2 = math.radians(origin.lat), math.radians(destination.lat)
    d_lat = lat2 - lat1
    d_lng = math.radians(destination.lng - origin.lng)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))

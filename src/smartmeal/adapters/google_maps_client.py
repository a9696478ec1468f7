"""Google Maps web service client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class MapsClient(Protocol):
    """Interface for geocoding and distance lookups."""

    async def geocode(self, address: str) -> dict[str, object]:
        """Geocode an address and return raw API data."""

    async def distance_matrix(
        self, origin: str, destinations: list[str], mode: str = "walking"
    ) -> dict[str, object]:
        """Return raw distance matrix data for one origin."""


@dataclass
class HttpxMapsClient(MapsClient):
    """HTTPX-backed Google Maps client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxMapsClient":
        """Create a maps client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def geocode(self, address: str) -> dict[str, object]:
        """Geocode an address."""
        response = await self.http_client.get(
            f"{self.base_url}/geocode/json",
            params={"address": address, "key": self.api_key},
            timeout=10,
        )
        response.raise_for_status()
        return response.json()

    async def distance_matrix(
        self, origin: str, destinations: list[str], mode: str = "walking"
    ) -> dict[str, object]:
        """Query walking distances from origin to each destination."""
        response = await self.http_client.get(
            f"{self.base_url}/distancematrix/json",
            params={
                "origins": origin,
                "destinations": "|".join(destinations),
                "mode": mode,
                "units": "metric",
                "key": self.api_key,
            },
            timeout=10,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

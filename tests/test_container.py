"""Tests for container wiring."""

import asyncio

from smartmeal.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.shopping_service is not None
    assert container.market_service.maps_client is None
    assert container.user_service.admin_emails == {"boss@example.com"}
    asyncio.run(container.close_resources())


def test_build_container_with_maps_key(settings) -> None:
    settings.google_maps_api_key = "maps-key"

    container = build_container(settings)

    assert container.market_service.maps_client is not None
    asyncio.run(container.close_resources())

"""ASGI entrypoint for the SmartMeal API."""

from smartmeal.api.app import create_app
from smartmeal.containers import build_container

app = create_app(build_container())

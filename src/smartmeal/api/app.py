"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from smartmeal.api.admin import router as admin_router
from smartmeal.api.auth import router as auth_router
from smartmeal.api.dashboard import router as dashboard_router
from smartmeal.api.dishes import router as dishes_router
from smartmeal.api.markets import router as markets_router
from smartmeal.api.planning import router as planning_router
from smartmeal.api.shopping import router as shopping_router
from smartmeal.api.stock import router as stock_router
from smartmeal.app_logging import configure_logging
from smartmeal.containers import AppContainer
from smartmeal.errors import (
    AuthenticationError,
    NotFoundError,
    RepositoryError,
    SmartMealError,
    ValidationError,
)

_ERROR_RESPONSES: tuple[tuple[type[SmartMealError], int, str], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND, "Not found"),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY, "Invalid request"),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED, "Authentication failed"),
    (RepositoryError, status.HTTP_502_BAD_GATEWAY, "Storage request failed"),
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    debug_errors = container.settings.environment == "local"

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="SmartMeal", lifespan=lifespan)
    app.state.container = container

    for router in (
        auth_router,
        dishes_router,
        planning_router,
        shopping_router,
        stock_router,
        markets_router,
        dashboard_router,
        admin_router,
    ):
        app.include_router(router)

    @app.exception_handler(SmartMealError)
    async def handle_domain_error(
        request: Request, exc: SmartMealError
    ) -> JSONResponse:
        status_code, detail = _describe(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Request failed", extra={"path": request.url.path}, exc_info=exc
            )
        else:
            logger.warning("%s %s: %s", request.method, request.url.path, exc)
        if debug_errors or status_code == status.HTTP_422_UNPROCESSABLE_ENTITY:
            detail = f"{detail}: {exc}"
        if debug_errors:
            detail = f"{detail} ({type(exc).__name__})"
        return JSONResponse(status_code=status_code, content={"detail": detail})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _describe(exc: SmartMealError) -> tuple[int, str]:
    for error_type, status_code, detail in _ERROR_RESPONSES:
        if isinstance(exc, error_type):
            return status_code, detail
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "Unexpected error"

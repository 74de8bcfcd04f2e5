"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from meal_planner.api.food_items import router as food_items_router
from meal_planner.api.meal_plans import router as meal_plans_router
from meal_planner.api.meals import router as meals_router
from meal_planner.app_logging import configure_logging
from meal_planner.config import parse_user_ids
from meal_planner.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            app.state.container.catalog_cache.reload()
        except Exception:
            logger.exception("Failed to preload food catalog")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(food_items_router)
    app.include_router(meals_router)
    app.include_router(meal_plans_router)

    @app.exception_handler(RuntimeError)
    async def persistence_error(request: Request, exc: RuntimeError) -> JSONResponse:
        logger.exception(
            "Request failed", extra={"path": request.url.path}, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/users")
    async def list_users(request: Request) -> dict[str, list[str]]:
        """Return the configured planner users."""
        state_container: AppContainer = request.app.state.container
        return {"users": parse_user_ids(state_container.settings.planner_users)}

    return app

"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError

from calorie_tracker.api.food_scan import router as food_scan_router
from calorie_tracker.api.meals import router as meals_router
from calorie_tracker.api.users import router as users_router
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.config import parse_allowed_origins
from calorie_tracker.containers import AppContainer
from calorie_tracker.errors import ErrorKind, TrackerError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allowed_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(users_router)
    app.include_router(meals_router)
    app.include_router(food_scan_router)

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(
        request: Request, exc: TrackerError
    ) -> JSONResponse:
        if exc.is_client_fault:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
        else:
            logger.error(
                "%s %s failed: %s",
                request.method,
                request.url.path,
                exc,
                exc_info=exc.__cause__ or exc,
            )
        return JSONResponse(status_code=exc.kind.http_status, content=exc.to_dict())

    @app.exception_handler(APIError)
    async def persistence_error_handler(
        request: Request, exc: APIError
    ) -> JSONResponse:
        logger.error("Supabase request failed for %s", request.url.path, exc_info=exc)
        error = TrackerError(ErrorKind.PERSISTENCE_FAILURE, "Internal server error")
        return JSONResponse(status_code=error.kind.http_status, content=error.to_dict())

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app

"""
EcoCycle API application.

``create_app`` wires middleware, error handlers and the ``/api/v1``
routers; ``app`` is the instance uvicorn serves.

Dependencies: fastapi, uvicorn, ecocycle.api.routers
System role: API entry point
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ecocycle.boundary.db.connection import dispose_engine
from ecocycle.configs import get_settings, validate_settings
from ecocycle.observability.logger import configure_logging
from ecocycle.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    bookings_router,
    collectors_router,
    dashboard_router,
    detections_router,
    health_router,
    profile_router,
    rewards_router,
    statistics_router,
    uploads_router,
)
from .routers.router_utils import register_exception_handlers

API_PREFIX = "/api/v1"

ROUTERS = (
    health_router,
    profile_router,
    detections_router,
    rewards_router,
    collectors_router,
    bookings_router,
    statistics_router,
    dashboard_router,
    uploads_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)

    # Raises in production when auth is misconfigured
    problems = validate_settings(settings)
    logger.info(
        "EcoCycle API starting",
        extra={
            "app_version": settings.app_version,
            "environment": settings.environment,
            "config_problems": len(problems),
        },
    )

    yield

    if await dispose_engine():
        logger.info("Database pool closed")


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=f"{settings.app_name} API",
        description="E-waste recycling: detections, EcoCoins, rewards and pickup bookings",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Starlette runs the last-added middleware first: correlation, then logging, then CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials="*" not in settings.api.cors_origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Correlation-ID"],
        expose_headers=["X-Correlation-ID", "Retry-After"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("ecocycle.api.main:app", host="0.0.0.0", port=8000)

"""FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.errors import register_exception_handlers
from .api.routes import analytics, drivers, health, routes, shops, targets
from .config import Settings, settings as default_settings
from .logging_utils import configure_logging
from .persistence import EntityStore, build_store
from .services.optimization import OptimizationHistory, RouteOptimizationService, RouteOptimizer, build_optimizer
from .services.service_area import ServiceArea

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: EntityStore | None = None,
    optimizer: RouteOptimizer | None = None,
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    service_area = ServiceArea.from_file(settings.service_area_file) if settings.service_area_file else None
    store = store if store is not None else build_store(settings)
    optimizer = optimizer if optimizer is not None else build_optimizer(settings, service_area=service_area)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.store = store
    app.state.service_area = service_area
    app.state.optimization_service = RouteOptimizationService(store, optimizer, OptimizationHistory())

    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    register_exception_handlers(app)

    # Root endpoint for diagnostics
    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(shops.router, prefix=settings.api_prefix)
    app.include_router(drivers.router, prefix=settings.api_prefix)
    app.include_router(routes.router, prefix=settings.api_prefix)
    app.include_router(targets.router, prefix=settings.api_prefix)
    app.include_router(analytics.router, prefix=settings.api_prefix)

    logger.info(
        "Created %s (storage=%s, optimizer=%s)",
        settings.app_name,
        settings.storage_backend,
        settings.optimizer_backend,
    )
    return app


app = create_app()

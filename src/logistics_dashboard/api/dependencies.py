"""Request-scoped accessors for objects created by ``create_app``."""

from typing import Optional

from fastapi import Request

from ..persistence.base import EntityStore
from ..services.optimization.service import RouteOptimizationService
from ..services.service_area import ServiceArea


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


def get_service_area(request: Request) -> Optional[ServiceArea]:
    return request.app.state.service_area


def get_optimization_service(request: Request) -> RouteOptimizationService:
    return request.app.state.optimization_service

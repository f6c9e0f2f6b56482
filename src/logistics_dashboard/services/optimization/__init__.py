"""Route optimization collaborators and orchestration."""

from __future__ import annotations

from ...config import Settings
from ..service_area import ServiceArea
from .models import OptimizationRecord, OptimizationRequest, RouteOptimizationResult, RouteOptimizer
from .remote import RemoteOptimizer
from .sequence_solver import SequenceOptimizer
from .service import OptimizationHistory, RouteOptimizationService


def build_optimizer(settings: Settings, service_area: ServiceArea | None = None) -> RouteOptimizer:
    """Create the optimizer selected by ``optimizer_backend``."""
    if settings.optimizer_backend == "remote":
        return RemoteOptimizer(settings)
    return SequenceOptimizer(settings, service_area=service_area)


__all__ = [
    "OptimizationHistory",
    "OptimizationRecord",
    "OptimizationRequest",
    "RemoteOptimizer",
    "RouteOptimizationResult",
    "RouteOptimizationService",
    "RouteOptimizer",
    "SequenceOptimizer",
    "build_optimizer",
]

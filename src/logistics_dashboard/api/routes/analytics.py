"""Route optimization and dashboard analytics endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ...persistence.base import EntityStore
from ...schemas.analytics import DashboardSummaryModel, OptimizationRecordModel
from ...services.analytics import compute_summary
from ...services.optimization.service import RouteOptimizationService
from ...services.service_area import ServiceArea
from ..dependencies import get_optimization_service, get_service_area, get_store

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.post(
    "/optimize-route/{route_id}",
    response_model=OptimizationRecordModel,
    status_code=status.HTTP_200_OK,
)
def optimize_route(
    route_id: str,
    service: RouteOptimizationService = Depends(get_optimization_service),
) -> OptimizationRecordModel:
    record = service.optimize(route_id)
    return OptimizationRecordModel.model_validate(record)


@router.get(
    "/route-optimizations",
    response_model=List[OptimizationRecordModel],
    status_code=status.HTTP_200_OK,
)
def route_optimizations(
    route_id: Optional[str] = Query(default=None, alias="routeId", description="Only records for this route"),
    service: RouteOptimizationService = Depends(get_optimization_service),
) -> List[OptimizationRecordModel]:
    return [OptimizationRecordModel.model_validate(record) for record in service.history.list(route_id)]


@router.get("/summary", response_model=DashboardSummaryModel, status_code=status.HTTP_200_OK)
def summary(
    store: EntityStore = Depends(get_store),
    service: RouteOptimizationService = Depends(get_optimization_service),
    service_area: Optional[ServiceArea] = Depends(get_service_area),
) -> DashboardSummaryModel:
    """Record counts, status breakdowns and target completion percentages."""
    data = compute_summary(store, optimizations_run=len(service.history), service_area=service_area)
    return DashboardSummaryModel.model_validate(data)

"""Route optimization and dashboard analytics schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RouteOptimizationResultModel(BaseModel):
    """Structured output of the route-optimization collaborator."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    optimized_order: List[str] = Field(..., alias="optimizedOrder")
    original_distance: float = Field(..., ge=0, alias="originalDistance")
    optimized_distance: float = Field(..., ge=0, alias="optimizedDistance")
    time_saved: float = Field(..., ge=0, alias="timeSaved")
    fuel_saved: float = Field(..., ge=0, alias="fuelSaved")
    suggestions: List[str] = Field(default_factory=list)


class OptimizationRecordModel(RouteOptimizationResultModel):
    route_id: str = Field(..., alias="routeId")
    created_at: datetime = Field(..., alias="createdAt")


class TargetProgressModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    target_id: str = Field(..., alias="targetId")
    driver_id: str = Field(..., alias="driverId")
    period: str
    shops_completion: Optional[float] = Field(None, alias="shopsCompletion")
    deliveries_completion: Optional[float] = Field(None, alias="deliveriesCompletion")


class DashboardSummaryModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_shops: int = Field(..., alias="totalShops")
    total_drivers: int = Field(..., alias="totalDrivers")
    total_routes: int = Field(..., alias="totalRoutes")
    total_targets: int = Field(..., alias="totalTargets")
    shops_by_status: Dict[str, int] = Field(..., alias="shopsByStatus")
    drivers_by_status: Dict[str, int] = Field(..., alias="driversByStatus")
    routes_by_status: Dict[str, int] = Field(..., alias="routesByStatus")
    shops_outside_service_area: Optional[int] = Field(None, alias="shopsOutsideServiceArea")
    optimizations_run: int = Field(..., alias="optimizationsRun")
    target_progress: List[TargetProgressModel] = Field(default_factory=list, alias="targetProgress")

"""Route optimization domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Protocol


@dataclass(slots=True)
class OptimizationStop:
    shop_id: str
    name: str
    latitude: float
    longitude: float
    status: str = "active"


@dataclass(slots=True)
class OptimizationRequest:
    """A route resolved against the store, ready for an optimizer."""

    route_id: str
    route_name: str
    stops: List[OptimizationStop]
    vehicle_type: Optional[str] = None
    driver_status: Optional[str] = None
    skipped_shop_ids: List[str] = field(default_factory=list)

    def to_payload(self) -> dict:
        return {
            "routeId": self.route_id,
            "routeName": self.route_name,
            "vehicleType": self.vehicle_type,
            "driverStatus": self.driver_status,
            "skippedShopIds": list(self.skipped_shop_ids),
            "stops": [
                {
                    "shopId": stop.shop_id,
                    "name": stop.name,
                    "latitude": stop.latitude,
                    "longitude": stop.longitude,
                    "status": stop.status,
                }
                for stop in self.stops
            ],
        }


@dataclass(slots=True)
class RouteOptimizationResult:
    optimized_order: List[str]
    original_distance: float
    optimized_distance: float
    time_saved: float
    fuel_saved: float
    suggestions: List[str] = field(default_factory=list)


@dataclass(slots=True)
class OptimizationRecord:
    """A result kept in the optimization history."""

    route_id: str
    created_at: datetime
    optimized_order: List[str]
    original_distance: float
    optimized_distance: float
    time_saved: float
    fuel_saved: float
    suggestions: List[str] = field(default_factory=list)

    @classmethod
    def from_result(cls, route_id: str, result: RouteOptimizationResult, created_at: datetime) -> "OptimizationRecord":
        return cls(
            route_id=route_id,
            created_at=created_at,
            optimized_order=list(result.optimized_order),
            original_distance=result.original_distance,
            optimized_distance=result.optimized_distance,
            time_saved=result.time_saved,
            fuel_saved=result.fuel_saved,
            suggestions=list(result.suggestions),
        )


class RouteOptimizer(Protocol):
    def optimize(self, request: OptimizationRequest) -> RouteOptimizationResult: ...
